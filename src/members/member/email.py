"""EmailAddress value object for member emails."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from members.domain import members


@members.value_object(part_of="Member")
class EmailAddress:
    """A validated, lower-cased email address.

    Structural checks only: one @, non-empty local and domain parts, a dot
    in the domain, no whitespace or consecutive dots.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
