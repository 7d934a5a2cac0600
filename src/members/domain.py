"""Members bounded context: member profiles, the follow graph and saved recipes.

Recipes are referenced by id only; the cookbook context owns them.
"""

from protean.domain import Domain

from members.utils.logging import get_logger

members = Domain(name="members")

logger = get_logger(__name__)
