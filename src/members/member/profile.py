"""Member profile and account: commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from members.domain import members
from members.member.member import _UNSET, Member


@members.command(part_of="Member")
class UpdateMemberProfile:
    """Change a member's public profile. Omitted fields are left unchanged."""

    member_id: Identifier(required=True)
    name: String(max_length=50)
    avatar: String(max_length=500)
    bio: String(max_length=500)
    location: String(max_length=100)
    website: String(max_length=200)
    social_links: Text()  # JSON object of {instagram, twitter, facebook}


@members.command(part_of="Member")
class DeactivateMember:
    member_id: Identifier(required=True)


@members.command_handler(part_of=Member)
class MemberProfileHandler:
    @handle(UpdateMemberProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Member)
        member = repo.get(command.member_id)

        def _given(value):
            return value if value is not None else _UNSET

        member.update_profile(
            name=_given(command.name),
            avatar=_given(command.avatar),
            bio=_given(command.bio),
            location=_given(command.location),
            website=_given(command.website),
            social_links=json.loads(command.social_links) if command.social_links else _UNSET,
        )
        repo.add(member)

    @handle(DeactivateMember)
    def deactivate_member(self, command):
        repo = current_domain.repository_for(Member)
        member = repo.get(command.member_id)
        member.deactivate()
        repo.add(member)
