"""Domain events for the Member aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from members.domain import members


@members.event(part_of="Member")
class MemberRegistered:
    """A new member joined RecipeShare."""

    __version__ = 1

    member_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    joined_at: DateTime(required=True)


@members.event(part_of="Member")
class MemberProfileUpdated:
    """A member changed their public profile."""

    __version__ = 1

    member_id: Identifier(required=True)
    name: String(required=True)
    bio: String()
    location: String()
    website: String()
    updated_at: DateTime(required=True)


@members.event(part_of="Member")
class MemberDeactivated:
    __version__ = 1

    member_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@members.event(part_of="Member")
class MemberFollowed:
    """A member started following another member."""

    __version__ = 1

    member_id: Identifier(required=True)
    followed_member_id: Identifier(required=True)
    following_count: Integer(required=True)
    followed_at: DateTime(required=True)


@members.event(part_of="Member")
class MemberUnfollowed:
    __version__ = 1

    member_id: Identifier(required=True)
    unfollowed_member_id: Identifier(required=True)
    following_count: Integer(required=True)
    unfollowed_at: DateTime(required=True)


@members.event(part_of="Member")
class RecipeSaved:
    """A member added a recipe to their saved list."""

    __version__ = 1

    member_id: Identifier(required=True)
    recipe_id: Identifier(required=True)
    saved_at: DateTime(required=True)


@members.event(part_of="Member")
class RecipeUnsaved:
    __version__ = 1

    member_id: Identifier(required=True)
    recipe_id: Identifier(required=True)
    unsaved_at: DateTime(required=True)
