"""Member aggregate root with follow links, saved recipes and the SocialLinks value object."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String, ValueObject

from members.domain import members
from members.member.email import EmailAddress

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class MemberRole(Enum):
    USER = "user"
    ADMIN = "admin"


@members.value_object(part_of="Member")
class SocialLinks:
    """Handles or URLs for the member's social profiles. Replaced wholesale on update."""

    instagram: String(max_length=200, default="")
    twitter: String(max_length=200, default="")
    facebook: String(max_length=200, default="")


@members.entity(part_of="Member")
class FollowerLink:
    """Another member who follows this one."""

    follower_id: Identifier(required=True)
    since: DateTime(required=True)


@members.entity(part_of="Member")
class FollowingLink:
    """A member this one follows."""

    followed_id: Identifier(required=True)
    since: DateTime(required=True)


@members.entity(part_of="Member")
class SavedRecipe:
    recipe_id: Identifier(required=True)
    saved_at: DateTime(required=True)


def _build_social_links(social_links):
    social_links = social_links or {}
    return SocialLinks(
        instagram=social_links.get("instagram") or "",
        twitter=social_links.get("twitter") or "",
        facebook=social_links.get("facebook") or "",
    )


@members.aggregate
class Member:
    """A person on RecipeShare who publishes, comments on and saves recipes.

    The follow graph is stored on both ends: the follower keeps a
    FollowingLink and the followed member keeps a FollowerLink. Both sides
    are changed together by the ToggleFollow handler.
    """

    name: String(required=True, max_length=50)
    email: ValueObject(EmailAddress, required=True)
    avatar: String(max_length=500, default="")
    bio: String(max_length=500, default="")
    location: String(max_length=100, default="")
    website: String(max_length=200, default="")
    social_links: ValueObject(SocialLinks)
    role: String(choices=MemberRole, default=MemberRole.USER.value)
    is_active: Boolean(default=True)
    followers: HasMany(FollowerLink)
    following: HasMany(FollowingLink)
    saved_recipes: HasMany(SavedRecipe)
    joined_at: DateTime()

    @invariant.post
    def name_minimum_length(self):
        if self.name is not None and len(self.name.strip()) < 2:
            raise ValidationError({"name": ["Name must be at least 2 characters"]})

    @invariant.post
    def cannot_follow_self(self):
        if any(str(link.followed_id) == str(self.id) for link in self.following):
            raise ValidationError({"following": ["You cannot follow yourself"]})

    @classmethod
    def register(cls, name, email, avatar=None, bio=None, location=None, website=None, role=None):
        from members.member.events import MemberRegistered

        now = datetime.now(UTC)
        email = email.strip().lower()

        member = cls(
            name=name.strip() if name else name,
            email=EmailAddress(address=email),
            avatar=avatar or "",
            bio=bio or "",
            location=location or "",
            website=website or "",
            social_links=_build_social_links(None),
            role=role or MemberRole.USER.value,
            is_active=True,
            joined_at=now,
        )
        member.raise_(
            MemberRegistered(
                member_id=member.id,
                name=member.name,
                email=email,
                role=member.role,
                joined_at=now,
            )
        )
        return member

    @property
    def follower_count(self):
        return len(self.followers)

    @property
    def following_count(self):
        return len(self.following)

    def is_following(self, member_id):
        return any(str(link.followed_id) == str(member_id) for link in self.following)

    def has_saved(self, recipe_id):
        return any(str(saved.recipe_id) == str(recipe_id) for saved in self.saved_recipes)

    def update_profile(
        self,
        name=_UNSET,
        avatar=_UNSET,
        bio=_UNSET,
        location=_UNSET,
        website=_UNSET,
        social_links=_UNSET,
    ):
        from members.member.events import MemberProfileUpdated

        changes = {
            "name": name.strip() if isinstance(name, str) else name,
            "avatar": avatar,
            "bio": bio,
            "location": location,
            "website": website,
        }
        changes = {field: value for field, value in changes.items() if value is not _UNSET}
        if social_links is not _UNSET:
            changes["social_links"] = _build_social_links(social_links)

        if not changes:
            return

        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value if value is not None else "")

        self.raise_(
            MemberProfileUpdated(
                member_id=self.id,
                name=self.name,
                bio=self.bio,
                location=self.location,
                website=self.website,
                updated_at=datetime.now(UTC),
            )
        )

    def deactivate(self):
        from members.member.events import MemberDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Member is already deactivated"]})

        self.is_active = False
        self.raise_(
            MemberDeactivated(
                member_id=self.id,
                deactivated_at=datetime.now(UTC),
            )
        )

    # Follow graph
    def follow(self, member_id):
        from members.member.events import MemberFollowed

        if str(member_id) == str(self.id):
            raise ValidationError({"following": ["You cannot follow yourself"]})
        if self.is_following(member_id):
            raise ValidationError({"following": ["Already following this member"]})

        now = datetime.now(UTC)
        self.add_following(FollowingLink(followed_id=member_id, since=now))
        self.raise_(
            MemberFollowed(
                member_id=self.id,
                followed_member_id=member_id,
                following_count=self.following_count,
                followed_at=now,
            )
        )

    def unfollow(self, member_id):
        from members.member.events import MemberUnfollowed

        link = next((link for link in self.following if str(link.followed_id) == str(member_id)), None)
        if link is None:
            raise ValidationError({"following": ["Not following this member"]})

        self.remove_following(link)
        self.raise_(
            MemberUnfollowed(
                member_id=self.id,
                unfollowed_member_id=member_id,
                following_count=self.following_count,
                unfollowed_at=datetime.now(UTC),
            )
        )

    def add_follower(self, member_id):
        if not any(str(link.follower_id) == str(member_id) for link in self.followers):
            self.add_followers(FollowerLink(follower_id=member_id, since=datetime.now(UTC)))

    def remove_follower(self, member_id):
        link = next((link for link in self.followers if str(link.follower_id) == str(member_id)), None)
        if link is not None:
            self.remove_followers(link)

    # Saved recipes
    def save_recipe(self, recipe_id):
        from members.member.events import RecipeSaved

        if self.has_saved(recipe_id):
            raise ValidationError({"saved_recipes": ["Recipe already saved"]})

        now = datetime.now(UTC)
        self.add_saved_recipes(SavedRecipe(recipe_id=recipe_id, saved_at=now))
        self.raise_(
            RecipeSaved(
                member_id=self.id,
                recipe_id=recipe_id,
                saved_at=now,
            )
        )

    def unsave_recipe(self, recipe_id):
        """Remove a recipe from the saved list. Unsaving an unsaved recipe is a no-op."""
        from members.member.events import RecipeUnsaved

        saved = next((s for s in self.saved_recipes if str(s.recipe_id) == str(recipe_id)), None)
        if saved is None:
            return

        self.remove_saved_recipes(saved)
        self.raise_(
            RecipeUnsaved(
                member_id=self.id,
                recipe_id=recipe_id,
                unsaved_at=datetime.now(UTC),
            )
        )
