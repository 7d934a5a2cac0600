"""Member registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from members.domain import logger, members
from members.member.member import Member
from members.utils.query import fetch_all


@members.command(part_of="Member")
class RegisterMember:
    """Create a new member account. The email must not already be registered."""

    name: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    avatar: String(max_length=500)
    bio: String(max_length=500)
    location: String(max_length=100)
    website: String(max_length=200)


@members.command_handler(part_of=Member)
class RegisterMemberHandler:
    @handle(RegisterMember)
    def register_member(self, command):
        email = command.email.strip().lower()
        if any(member.email.address == email for member in fetch_all(Member)):
            raise ValidationError({"email": ["A member with this email already exists"]})

        member = Member.register(
            name=command.name,
            email=email,
            avatar=command.avatar,
            bio=command.bio,
            location=command.location,
            website=command.website,
        )
        current_domain.repository_for(Member).add(member)
        logger.info("member_registered", member_id=str(member.id))
        return str(member.id)
