"""Read-side queries over members and the follow graph."""

import math
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from members.member.member import Member
from members.utils.query import fetch_all

MAX_LIMIT = 50
DEFAULT_LIMIT = 20


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_LIMIT
    total: int = 0
    pages: int = 0


def _paginate(items, page, limit):
    if page < 1:
        raise ValidationError({"page": ["Page must be a positive integer"]})
    if limit < 1 or limit > MAX_LIMIT:
        raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_LIMIT}"]})

    start = (page - 1) * limit
    return Page(
        items=items[start : start + limit],
        page=page,
        limit=limit,
        total=len(items),
        pages=math.ceil(len(items) / limit),
    )


def _get_many(member_ids):
    repo = current_domain.repository_for(Member)
    found = []
    for member_id in member_ids:
        try:
            found.append(repo.get(str(member_id)))
        except ObjectNotFoundError:
            continue
    return found


def member_profile(member_id):
    """Public profile of an active member, with follow counts."""
    member = current_domain.repository_for(Member).get(member_id)
    if not member.is_active:
        raise ObjectNotFoundError(f"Member with id {member_id} does not exist")

    return {
        "id": str(member.id),
        "name": member.name,
        "avatar": member.avatar,
        "bio": member.bio,
        "location": member.location,
        "website": member.website,
        "social_links": {
            "instagram": member.social_links.instagram if member.social_links else "",
            "twitter": member.social_links.twitter if member.social_links else "",
            "facebook": member.social_links.facebook if member.social_links else "",
        },
        "follower_count": member.follower_count,
        "following_count": member.following_count,
        "saved_count": len(member.saved_recipes),
        "joined_at": member.joined_at,
    }


def followers_of(member_id, page=1, limit=DEFAULT_LIMIT):
    member = current_domain.repository_for(Member).get(member_id)
    links = sorted(member.followers, key=lambda link: link.since)
    return _paginate(_get_many(link.follower_id for link in links), page, limit)


def following_of(member_id, page=1, limit=DEFAULT_LIMIT):
    member = current_domain.repository_for(Member).get(member_id)
    links = sorted(member.following, key=lambda link: link.since)
    return _paginate(_get_many(link.followed_id for link in links), page, limit)


def saved_recipe_ids(member_id):
    member = current_domain.repository_for(Member).get(member_id)
    return [str(saved.recipe_id) for saved in sorted(member.saved_recipes, key=lambda s: s.saved_at)]


def search_members(term, limit=DEFAULT_LIMIT):
    """Active members whose name contains ``term``, case-insensitively."""
    needle = (term or "").strip().lower()
    if not needle:
        raise ValidationError({"term": ["Search term is required"]})

    matches = [m for m in fetch_all(Member, is_active=True) if needle in m.name.lower()]
    return sorted(matches, key=lambda m: m.name.lower())[:limit]


def suggested_members(member_id, limit=10):
    """Active members not yet followed, most followed first."""
    member = current_domain.repository_for(Member).get(member_id)
    candidates = [
        m
        for m in fetch_all(Member, is_active=True)
        if str(m.id) != str(member.id) and not member.is_following(m.id)
    ]
    return sorted(candidates, key=lambda m: m.follower_count, reverse=True)[:limit]
