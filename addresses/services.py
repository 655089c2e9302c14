"""
Address book operations.

Every write runs in one transaction so the default-address flag is never
observed in a broken state: a profile with addresses has exactly one default.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from .models import Address

logger = logging.getLogger(__name__)


def _addresses_for(profile):
    return Address.objects.select_related('department', 'municipality').filter(profile=profile)


def _get_owned_address(address_id, profile):
    address = Address.objects.select_related('department', 'municipality').filter(pk=address_id).first()
    if address is None:
        raise NotFound('Address not found')
    if address.profile_id != profile.id:
        raise PermissionDenied('You do not have access to this address')
    return address


def create_address(profile, data):
    """
    Add an address to the profile's book.

    The first address of a profile always becomes the default. Otherwise the
    requested flag is honoured and any previous default is cleared.
    """
    data = dict(data)
    wants_default = bool(data.pop('is_default', False))

    with transaction.atomic():
        if wants_default:
            Address.objects.filter(profile=profile, is_default=True).update(is_default=False)

        existing = Address.objects.filter(profile=profile).count()
        address = Address.objects.create(
            profile=profile,
            is_default=True if existing == 0 else wants_default,
            **data
        )

    logger.info(f"Address {address.id} created for profile {profile.id} (default={address.is_default})")
    return _addresses_for(profile).get(pk=address.pk)


def list_addresses(profile):
    return _addresses_for(profile).order_by('-is_default', '-created_at')


def get_address(address_id, profile):
    return _get_owned_address(address_id, profile)


def update_address(address_id, profile, data):
    """
    Patch an address.

    Promoting an address to default clears the flag on its siblings in the
    same transaction. Demoting the current default is ignored; the default
    only moves by promoting another address or deleting this one.
    """
    data = dict(data)
    make_default = data.pop('is_default', None)

    with transaction.atomic():
        address = _get_owned_address(address_id, profile)

        if make_default and not address.is_default:
            Address.objects.filter(profile=profile).exclude(pk=address.pk).update(is_default=False)
            address.is_default = True

        for field, value in data.items():
            setattr(address, field, value)
        address.save()

    return _addresses_for(profile).get(pk=address.pk)


def delete_address(address_id, profile):
    """Delete an address, promoting the newest remaining one if it was the default."""
    with transaction.atomic():
        address = _get_owned_address(address_id, profile)
        was_default = address.is_default
        address.delete()

        if was_default:
            successor = Address.objects.filter(profile=profile).order_by('-created_at').first()
            if successor is not None:
                successor.is_default = True
                successor.save(update_fields=['is_default', 'updated_at'])
                logger.info(f"Address {successor.id} promoted to default for profile {profile.id}")


def get_default_address(profile):
    return _addresses_for(profile).filter(is_default=True).first()
