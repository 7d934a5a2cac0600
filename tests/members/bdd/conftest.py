"""Shared BDD fixtures and step definitions for the Members domain."""

import pytest
from members.member.following import ToggleFollow
from members.member.member import Member
from members.member.profile import DeactivateMember
from members.member.registration import RegisterMember
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def people():
    """Member id per display name."""
    return {}


@pytest.fixture()
def error():
    return {"exc": None}


def _get(people, name):
    return current_domain.repository_for(Member).get(people[name])


@given(parsers.cfparse('"{name}" is a registered member'))
def registered_member(people, name):
    people[name] = current_domain.process(
        RegisterMember(name=name, email=f"{name.lower()}@example.com"),
        asynchronous=False,
    )


@given(parsers.cfparse('"{member}" follows "{target}" already'))
@when(parsers.cfparse('"{member}" toggles follow on "{target}"'))
def toggle_follow(people, error, member, target):
    try:
        current_domain.process(
            ToggleFollow(member_id=people[member], target_id=people[target]),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


@given(parsers.cfparse('"{name}" has deactivated their account'))
def deactivated(people, name):
    current_domain.process(DeactivateMember(member_id=people[name]), asynchronous=False)


@then(parsers.cfparse('"{member}" follows "{target}"'))
def member_follows(people, member, target):
    assert _get(people, member).is_following(people[target])


@then(parsers.cfparse('"{member}" does not follow "{target}"'))
def member_does_not_follow(people, member, target):
    assert not _get(people, member).is_following(people[target])


@then(parsers.re(r'"(?P<name>[^"]+)" has (?P<count>\d+) followers?'))
def follower_count(people, name, count):
    assert _get(people, name).follower_count == int(count)


@then(parsers.cfparse('the action fails with "{message}"'))
def action_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"].messages)
