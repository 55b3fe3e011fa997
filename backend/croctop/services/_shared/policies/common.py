def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource; anonymous actors own nothing."""
    if actor_id is None:
        return False
    return int(actor_id) == int(owner_id)
