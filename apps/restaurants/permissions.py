from django.conf import settings
from rest_framework import permissions

from .services import get_session_restaurant

PARTNER_COOKIE_SALT = 'wanderbite.partner'


def read_partner_restaurant(request):
    """Restaurant bound to the request's signed partner cookie, or None."""
    restaurant_id = request.get_signed_cookie(
        settings.PARTNER_SESSION_COOKIE_NAME,
        default=None,
        salt=PARTNER_COOKIE_SALT,
        max_age=settings.PARTNER_SESSION_MAX_AGE,
    )
    return get_session_restaurant(restaurant_id)


def attach_partner_cookie(response, restaurant):
    response.set_signed_cookie(
        settings.PARTNER_SESSION_COOKIE_NAME,
        str(restaurant.id),
        salt=PARTNER_COOKIE_SALT,
        max_age=settings.PARTNER_SESSION_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite='Lax',
    )
    return response


def clear_partner_cookie(response):
    response.delete_cookie(settings.PARTNER_SESSION_COOKIE_NAME, samesite='Lax')
    return response


class HasPartnerSession(permissions.BasePermission):
    """
    Permission: request carries a valid partner cookie.

    The resolved restaurant is stored on ``request.partner_restaurant``.
    """

    message = 'Partner login required.'

    def has_permission(self, request, view):
        restaurant = read_partner_restaurant(request)
        request.partner_restaurant = restaurant
        return restaurant is not None
