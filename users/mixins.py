"""
Profile resolution for requests.

The identity provider attaches an authenticated user to the request; the
business layer works with the user's Profile.
"""
from rest_framework.exceptions import NotAuthenticated

from users.models import Profile


PROFILE_REQUIRED_MESSAGE = 'Profile not found for the authenticated user.'


def get_profile_from_request(request):
    """
    Get the Profile of the caller.

    Returns:
        Profile instance or None for anonymous callers
    """
    user = getattr(request, 'user', None)

    if user is None or not user.is_authenticated:
        return None

    try:
        return user.profile
    except Profile.DoesNotExist:
        return None


def require_profile_for_request(request):
    """Return the caller's profile or raise a 401 when there is none."""
    profile = get_profile_from_request(request)
    if profile is None:
        raise NotAuthenticated(PROFILE_REQUIRED_MESSAGE)
    return profile


class ProfileScopedMixin:
    """
    Mixin for views whose objects belong to the caller's profile.

    Usage:
        class AddressListCreateView(ProfileScopedMixin, generics.ListCreateAPIView):
            ...

    ``self.profile`` is resolved lazily and cached for the request.
    """

    @property
    def profile(self):
        if not hasattr(self, '_profile'):
            self._profile = require_profile_for_request(self.request)
        return self._profile
