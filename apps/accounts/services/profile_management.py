"""
Profile management service.

Onboarding creates the UserProfile; later edits go through update_profile.
Unique-username collisions surface as UsernameTakenError instead of a raw
database error.
"""

import logging
from typing import Iterable, Optional

from django.db import transaction, IntegrityError

from apps.accounts.models import User, UserProfile, DistanceBand, ProfileRole

from .exceptions import (
    ProfileNotFoundError,
    ProfileAlreadyExistsError,
    UsernameTakenError,
    InvalidProfileDataError,
)

logger = logging.getLogger(__name__)


def clean_flags(values: Optional[Iterable[str]]) -> list[str]:
    """Trim, lowercase and de-duplicate a list of dietary or allergy flags."""
    cleaned = []
    for value in values or []:
        flag = str(value).strip().lower()
        if flag and flag not in cleaned:
            cleaned.append(flag)
    return cleaned


def get_profile(*, user: User) -> UserProfile:
    """
    Return the user's profile.

    Raises:
        ProfileNotFoundError: If onboarding has not been completed
    """
    try:
        return UserProfile.objects.select_related('market').get(user=user)
    except UserProfile.DoesNotExist:
        raise ProfileNotFoundError("Complete onboarding before continuing.")


@transaction.atomic
def complete_onboarding(
    *,
    user: User,
    dietary_flags: Optional[list[str]] = None,
    distance_band: str,
    wants_cocktail_experience: bool = False,
    market_id=None,
) -> UserProfile:
    """
    Create the subscriber profile from the onboarding form.

    Raises:
        InvalidProfileDataError: If distance_band is not a known band
        ProfileAlreadyExistsError: If the user already has a profile
    """
    if distance_band not in DistanceBand.values:
        raise InvalidProfileDataError("Invalid distance band.")

    try:
        with transaction.atomic():
            profile = UserProfile.objects.create(
                user=user,
                email=user.email,
                dietary_flags=clean_flags(dietary_flags),
                distance_band=distance_band,
                wants_cocktail_experience=bool(wants_cocktail_experience),
                role=ProfileRole.SUBSCRIBER,
                market_id=market_id,
            )
    except IntegrityError:
        raise ProfileAlreadyExistsError("Profile already exists.")

    logger.info("Onboarding completed for user %s", user.id)
    return profile


@transaction.atomic
def update_profile(*, user: User, **fields) -> UserProfile:
    """
    Update editable profile fields.

    Accepts any of: full_name, email, username, phone_number, address,
    dietary_flags, allergy_flags, distance_band, market_id. Blank strings
    clear optional text fields; a blank username is stored as NULL so the
    unique constraint only applies to real usernames.

    Raises:
        ProfileNotFoundError: If onboarding has not been completed
        UsernameTakenError: If another profile already uses the username
    """
    try:
        profile = UserProfile.objects.select_for_update().get(user=user)
    except UserProfile.DoesNotExist:
        raise ProfileNotFoundError("Complete onboarding before continuing.")

    update_fields = []
    for name in ('full_name', 'email', 'phone_number', 'address'):
        if name in fields:
            setattr(profile, name, (fields[name] or '').strip())
            update_fields.append(name)

    if 'username' in fields:
        profile.username = (fields['username'] or '').strip() or None
        update_fields.append('username')

    for name in ('dietary_flags', 'allergy_flags'):
        if name in fields:
            setattr(profile, name, clean_flags(fields[name]))
            update_fields.append(name)

    if 'distance_band' in fields:
        if fields['distance_band'] not in DistanceBand.values:
            raise InvalidProfileDataError("Invalid distance band.")
        profile.distance_band = fields['distance_band']
        update_fields.append('distance_band')

    if 'market_id' in fields:
        profile.market_id = fields['market_id']
        update_fields.append('market')

    if not update_fields:
        return profile

    try:
        with transaction.atomic():
            profile.save(update_fields=update_fields + ['updated_at'])
    except IntegrityError:
        raise UsernameTakenError("That username is already taken.")

    return profile


def update_onboarding_details(*, user: User, username: str, address: str) -> UserProfile:
    """
    Save the username and address collected by the onboarding modal.

    Raises:
        InvalidProfileDataError: If either value is blank
        UsernameTakenError: If the username is already in use
    """
    if not (username or '').strip():
        raise InvalidProfileDataError("Username is required.")
    if not (address or '').strip():
        raise InvalidProfileDataError("Address is required.")

    return update_profile(user=user, username=username, address=address)


def get_onboarding_check(*, user: User) -> dict:
    """Report whether the onboarding modal still needs username/address."""
    profile = UserProfile.objects.filter(user=user).first()
    if profile is None or not profile.needs_onboarding_details:
        return {'needs_completion': False}

    return {
        'needs_completion': True,
        'username': profile.username,
        'address': profile.address or None,
    }
