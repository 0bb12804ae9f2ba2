import pytest
from pydantic import ValidationError

from sweetshop.core.errors import DuplicateSweetName, NotFound
from sweetshop.models.sweet import DEFAULT_IMAGE_URL, DEFAULT_WEIGHT
from sweetshop.schemas.sweet import SweetCategory, SweetCreate, SweetSearchCriteria, SweetUpdate
from sweetshop.services.sweet_service import (
    build_search_filters,
    delete_sweet,
    get_sweet,
    list_sweets,
    search_sweets,
    update_sweet,
)


@pytest.fixture
def catalog(create_sweet):
    return [
        create_sweet(name='Kaju Katli', category='Dry Fruits', price=800, description='Premium cashew fudge with silver leaf.'),
        create_sweet(name='Gulab Jamun', category='Syrup-based', price=250, description='Milk-solid balls soaked in rose syrup.'),
        create_sweet(name='Barfi', category='Milk-based', price=350, description='Milk fudge with pistachios and almonds.'),
        create_sweet(name='Badam Roll', category='Dry Fruits', price=300, description='Almond paste rolled with saffron.'),
    ]


def _names(sweets) -> set[str]:
    return {sweet.name for sweet in sweets}


def test_empty_criteria_builds_no_filters() -> None:
    assert build_search_filters(SweetSearchCriteria()) == []


def test_search_by_category_is_exact(db, catalog) -> None:
    results = search_sweets(db, SweetSearchCriteria(category=SweetCategory.DRY_FRUITS))

    assert _names(results) == {'Kaju Katli', 'Badam Roll'}
    assert all(sweet.category == 'Dry Fruits' for sweet in results)


def test_search_by_name_matches_name_category_and_description(db, catalog) -> None:
    assert _names(search_sweets(db, SweetSearchCriteria(name='jamun'))) == {'Gulab Jamun'}
    assert _names(search_sweets(db, SweetSearchCriteria(name='almond'))) == {'Barfi', 'Badam Roll'}
    assert _names(search_sweets(db, SweetSearchCriteria(name='syrup'))) == {'Gulab Jamun'}


def test_search_name_treats_wildcards_literally(db, catalog) -> None:
    assert search_sweets(db, SweetSearchCriteria(name='%')) == []
    assert search_sweets(db, SweetSearchCriteria(name='_')) == []


def test_search_price_bounds_are_inclusive(db, catalog) -> None:
    results = search_sweets(db, SweetSearchCriteria(min_price=250, max_price=350))

    assert _names(results) == {'Gulab Jamun', 'Barfi', 'Badam Roll'}


def test_search_zero_min_price_is_a_real_bound(db, catalog) -> None:
    assert len(search_sweets(db, SweetSearchCriteria(min_price=0))) == 4


def test_search_filters_combine_with_and(db, catalog) -> None:
    results = search_sweets(
        db,
        SweetSearchCriteria(name='almond', category=SweetCategory.DRY_FRUITS, max_price=500),
    )

    assert _names(results) == {'Badam Roll'}


def test_list_sweets_returns_newest_first(db, catalog) -> None:
    assert [sweet.name for sweet in list_sweets(db)] == ['Badam Roll', 'Barfi', 'Gulab Jamun', 'Kaju Katli']


def test_create_sweet_fills_defaults(create_sweet) -> None:
    sweet = create_sweet(name='Peda')

    assert sweet.image == DEFAULT_IMAGE_URL
    assert sweet.ingredients == []
    assert sweet.weight == DEFAULT_WEIGHT
    assert sweet.created_at is not None
    assert sweet.updated_at is not None


def test_create_sweet_rejects_duplicate_name(create_sweet) -> None:
    create_sweet(name='Peda')

    with pytest.raises(DuplicateSweetName):
        create_sweet(name='Peda')


def test_get_sweet_raises_not_found(db) -> None:
    with pytest.raises(NotFound) as exception_info:
        get_sweet(db, 404)

    assert exception_info.value.message == 'Sweet not found'


def test_update_sweet_changes_only_given_fields(db, create_sweet) -> None:
    sweet = create_sweet(name='Peda', price=260, quantity=40)

    updated = update_sweet(db, sweet.id, SweetUpdate(price=275, ingredients=[' Milk ', 'Sugar']))

    assert updated.price == 275
    assert updated.ingredients == ['Milk', 'Sugar']
    assert updated.quantity == 40
    assert updated.name == 'Peda'


def test_update_sweet_rejects_taken_name(db, create_sweet) -> None:
    create_sweet(name='Peda')
    other = create_sweet(name='Barfi')

    with pytest.raises(DuplicateSweetName):
        update_sweet(db, other.id, SweetUpdate(name='Peda'))


def test_update_missing_sweet_raises_not_found(db) -> None:
    with pytest.raises(NotFound):
        update_sweet(db, 404, SweetUpdate(price=10))


def test_delete_sweet_removes_it(db, create_sweet) -> None:
    sweet = create_sweet(name='Peda')
    sweet_id = sweet.id

    delete_sweet(db, sweet_id)

    with pytest.raises(NotFound):
        get_sweet(db, sweet_id)


def test_delete_missing_sweet_raises_not_found(db) -> None:
    with pytest.raises(NotFound):
        delete_sweet(db, 404)


@pytest.mark.parametrize(
    ('overrides', 'field'),
    [
        ({'category': 'Chocolate'}, 'category'),
        ({'price': 0}, 'price'),
        ({'quantity': -1}, 'quantity'),
        ({'description': 'Too short'}, 'description'),
        ({'weight': 'heavy'}, 'weight'),
        ({'image': 'not-a-url'}, 'image'),
        ({'ingredients': ['Milk', '  ']}, 'ingredients'),
        ({'name': 'X'}, 'name'),
    ],
)
def test_sweet_create_rejects_invalid_fields(overrides: dict, field: str) -> None:
    data = {
        'name': 'Kaju Katli',
        'category': 'Dry Fruits',
        'price': 800,
        'quantity': 10,
        'description': 'Premium cashew fudge with a thin silver leaf.',
    }
    data.update(overrides)

    with pytest.raises(ValidationError) as exception_info:
        SweetCreate(**data)

    assert exception_info.value.errors()[0]['loc'][0] == field
