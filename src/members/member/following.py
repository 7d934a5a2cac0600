"""ToggleFollow: follow a member, or unfollow one already followed.

Both members change: the follower's ``following`` and the target's
``followers``.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from members.domain import logger, members
from members.member.member import Member


@members.command(part_of="Member")
class ToggleFollow:
    member_id: Identifier(required=True)  # The member doing the following
    target_id: Identifier(required=True)


@members.command_handler(part_of=Member)
class ToggleFollowHandler:
    @handle(ToggleFollow)
    def toggle_follow(self, command):
        if str(command.member_id) == str(command.target_id):
            raise ValidationError({"target_id": ["You cannot follow yourself"]})

        repo = current_domain.repository_for(Member)
        follower = repo.get(command.member_id)
        target = repo.get(command.target_id)

        if follower.is_following(target.id):
            follower.unfollow(target.id)
            target.remove_follower(follower.id)
            following = False
        else:
            if not target.is_active:
                raise ValidationError({"target_id": ["Cannot follow a deactivated member"]})
            follower.follow(target.id)
            target.add_follower(follower.id)
            following = True

        repo.add(follower)
        repo.add(target)
        logger.info(
            "follow_toggled",
            member_id=str(follower.id),
            target_id=str(target.id),
            following=following,
        )
        return {"following": following, "follower_count": target.follower_count}
