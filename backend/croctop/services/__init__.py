"""Service layer.

Services live in subpackages (``auth``, ``users``, ``content``, ``graph``,
``tokens``) and are imported from there. Nothing is imported here:
``croctop.core.errors`` loads ``croctop.services._shared.errors`` before the
repositories exist.
"""
