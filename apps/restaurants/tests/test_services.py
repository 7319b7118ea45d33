"""
Service layer tests for the restaurant catalog and partner login.
"""

import pytest

from apps.restaurants.models import Restaurant, RestaurantOffer, RestaurantStatus
from apps.restaurants.services import (
    parse_cuisine_tags,
    list_assignable_restaurants,
    create_restaurant,
    retire_restaurant,
    login_partner,
)
from apps.restaurants.services.exceptions import (
    InvalidPinError,
    RestaurantNotFoundError,
    MarketNotFoundError,
    InvalidRestaurantDataError,
)


class TestParseCuisineTags:

    def test_splits_on_commas_and_semicolons(self):
        assert parse_cuisine_tags('Thai; Noodles, spicy ,,') == ['thai', 'noodles', 'spicy']

    def test_blank_input(self):
        assert parse_cuisine_tags('') == []
        assert parse_cuisine_tags(None) == []


@pytest.mark.django_db
class TestCatalog:

    def test_tags_normalised_on_save(self, restaurant):
        restaurant.refresh_from_db()
        assert restaurant.cuisine_tags == ['bbq', 'meat']

    def test_only_active_restaurants_with_active_offer(self, make_restaurant):
        listed = make_restaurant('Listed')
        make_restaurant('No Offer', offer=False)
        make_restaurant('Closed', status=RestaurantStatus.INACTIVE)
        paused = make_restaurant('Paused Offer')
        paused.offers.update(active=False)

        result = list_assignable_restaurants()

        assert [r.id for r in result] == [listed.id]
        assert result[0].active_offer.restaurant_id == listed.id

    def test_filters_by_market(self, make_restaurant, other_market):
        make_restaurant('Home')
        away = make_restaurant('Away', in_market=other_market)

        result = list_assignable_restaurants(market_id=other_market.id)

        assert [r.id for r in result] == [away.id]

    def test_create_restaurant_adds_org_and_default_offer(self, market):
        restaurant = create_restaurant(name=' Noodle Bar ', cuisine='Thai; Noodles', pin='9999')

        assert restaurant.name == 'Noodle Bar'
        assert restaurant.market == market
        assert restaurant.org is not None
        assert restaurant.cuisine_tags == ['thai', 'noodles']
        assert restaurant.check_pin('9999')
        offer = RestaurantOffer.objects.get(restaurant=restaurant)
        assert offer.discount_amount_cents == 1000
        assert offer.min_spend_cents == 4000
        assert offer.max_redemptions_per_month == 50

    def test_create_restaurant_requires_name(self, market):
        with pytest.raises(InvalidRestaurantDataError):
            create_restaurant(name='  ')

    def test_create_restaurant_without_market(self, db):
        with pytest.raises(MarketNotFoundError):
            create_restaurant(name='Nowhere')

    def test_retire_keeps_row(self, restaurant):
        retire_restaurant(restaurant_id=restaurant.id)

        restaurant.refresh_from_db()
        assert restaurant.status == RestaurantStatus.INACTIVE
        assert not restaurant.offers.filter(active=True).exists()
        assert list_assignable_restaurants() == []


@pytest.mark.django_db
class TestPartnerLogin:

    def test_login_success(self, restaurant):
        assert login_partner(restaurant_id=restaurant.id, pin=' 1234 ') == restaurant

    def test_wrong_pin(self, restaurant):
        with pytest.raises(InvalidPinError):
            login_partner(restaurant_id=restaurant.id, pin='0000')

    def test_missing_fields(self, restaurant):
        with pytest.raises(InvalidPinError):
            login_partner(restaurant_id=restaurant.id, pin='   ')

    def test_unknown_restaurant(self, db):
        with pytest.raises(RestaurantNotFoundError):
            login_partner(restaurant_id='00000000-0000-0000-0000-000000000000', pin='1234')

    def test_restaurant_without_pin_cannot_login(self, restaurant):
        Restaurant.objects.filter(id=restaurant.id).update(pin_hash='')

        with pytest.raises(InvalidPinError):
            login_partner(restaurant_id=restaurant.id, pin='1234')
