import logging

from models.users import ROLES, SUPPORT_TYPES, UserProfile
from utils.errors import AdminError, ValidationError
from utils.forms import clean

logger = logging.getLogger(__name__)


def provision_user(identity, profiles, username, display_name, email, password,
                   role="user", support_type=None, location=""):
    """
    Create an identity account and its "users" profile document.

    The profile is keyed by the account id. If writing the profile fails
    the account is removed again so the email can be reused.
    """
    username = clean(username)
    display_name = clean(display_name)
    email = clean(email)
    role = clean(role) or "user"
    support_type = clean(support_type) or None

    if not username or not display_name or not email or not password:
        raise ValidationError("Username, Display Name, Email, and Password are required")
    if role not in ROLES:
        raise ValidationError(f"Unknown role: {role}")
    if role == "support" and not support_type:
        raise ValidationError("Support Type is required for support users")
    if support_type and support_type not in SUPPORT_TYPES:
        raise ValidationError(f"Unknown support type: {support_type}")

    account = identity.create_account(email, password, display_name)

    profile = UserProfile(
        username=username,
        display_name=display_name,
        email=account["email"],
        role=role,
        support_type=support_type,
        location=clean(location),
    )
    try:
        doc = profiles.create(profile.to_dict(), doc_id=account["id"])
    except AdminError as e:
        logger.error("Profile for account %s could not be saved: %s", account["id"], e)
        try:
            identity.delete_account(account["id"])
        except AdminError as cleanup_error:
            logger.error("Could not remove account %s: %s", account["id"], cleanup_error)
        raise

    logger.info("Provisioned %s user %s (%s)", role, username, account["id"])
    return doc, account
