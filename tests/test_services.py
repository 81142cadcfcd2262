from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.errors import ConflictError, FieldRequiredError, MissingDataError, ReferentialError
from app.schemas.owner import OwnerCreate
from app.schemas.property import PropertyCreate, PropertyFilter, PropertyUpdate
from app.services import owners, properties
from app.services.pagination import total_pages
from tests.factories import add_owner, add_properties

def _payload(id_owner, **overrides):
    data = {
        "id_owner": id_owner,
        "name": "Beach House",
        "address": "12 Ocean Drive",
        "price": Decimal("500000"),
        "image": "https://img.example.com/beach.jpg",
    }
    data.update(overrides)
    return PropertyCreate(**data)

@pytest.mark.asyncio
async def test_create_owner_stamps_id_and_created_at(session):
    before = datetime.now(timezone.utc)
    owner = await owners.create_owner(
        session, OwnerCreate(name=" John Smith ", email="john@x.com", phone="555-0101")
    )
    assert owner.id
    assert owner.name == "John Smith"
    assert owner.created_at >= before
    assert (await owners.get_owner(session, owner.id)).email == "john@x.com"

@pytest.mark.asyncio
async def test_duplicate_owner_email_conflicts(session):
    await owners.create_owner(session, OwnerCreate(name="John Smith", email="john@x.com", phone="555-0101"))
    with pytest.raises(ConflictError):
        await owners.create_owner(session, OwnerCreate(name="Johnny", email="john@x.com", phone="555-0199"))
    assert len(await owners.list_owners(session)) == 1

@pytest.mark.asyncio
async def test_list_owners_newest_first(session):
    first = await add_owner(session, email="a@x.com", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    second = await add_owner(session, email="b@x.com", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
    assert [o.id for o in await owners.list_owners(session)] == [second.id, first.id]

@pytest.mark.asyncio
async def test_get_missing_returns_none(session):
    assert await owners.get_owner(session, "nope") is None
    assert await properties.get_property(session, "nope") is None

@pytest.mark.asyncio
async def test_create_property(session):
    owner = await add_owner(session)
    before = datetime.now(timezone.utc)
    prop = await properties.create_property(session, _payload(owner.id, name="  Beach House "))
    assert prop.name == "Beach House"
    assert prop.created_at >= before
    assert prop.updated_at == prop.created_at
    assert await properties.count_properties(session) == 1

@pytest.mark.asyncio
async def test_failed_create_persists_nothing(session):
    owner = await add_owner(session)
    with pytest.raises(FieldRequiredError):
        await properties.create_property(session, _payload(owner.id, address=" "))
    with pytest.raises(MissingDataError):
        await properties.create_property(session, None)
    assert await properties.count_properties(session) == 0

@pytest.mark.asyncio
async def test_unknown_owner_is_referential_error(session):
    with pytest.raises(ReferentialError):
        await properties.create_property(session, _payload("missing-owner"))
    assert await properties.count_properties(session) == 0

@pytest.mark.asyncio
async def test_same_name_conflicts_only_within_owner(session):
    john = await add_owner(session)
    sarah = await add_owner(session, name="Sarah Johnson", email="sarah@x.com")
    await properties.create_property(session, _payload(john.id))
    with pytest.raises(ConflictError):
        await properties.create_property(session, _payload(john.id))
    await properties.create_property(session, _payload(sarah.id))
    assert await properties.count_properties(session) == 2

@pytest.mark.asyncio
async def test_search_price_example(session):
    owner = await add_owner(session)
    await add_properties(session, owner.id, [350000, 500000, 750000, 900000])
    filters = PropertyFilter(min_price=Decimal("400000"), max_price=Decimal("800000"), page=1, page_size=10)

    items, window = await properties.search_properties(session, filters)
    total = await properties.count_properties(session, filters)

    assert sorted(p.price for p in items) == [Decimal("500000"), Decimal("750000")]
    assert total == 2
    assert total_pages(total, window.page_size) == 1

@pytest.mark.asyncio
async def test_pages_concatenate_to_single_fetch(session):
    owner = await add_owner(session)
    await add_properties(session, owner.id, range(1000, 1023))
    filters = PropertyFilter(name="house")

    everything, _ = await properties.search_properties(session, filters.model_copy(update={"page_size": 100}))
    total = await properties.count_properties(session, filters)
    pages = total_pages(total, 5)
    paged = []
    for page in range(1, pages + 1):
        items, _ = await properties.search_properties(session, filters.model_copy(update={"page": page, "page_size": 5}))
        paged.extend(items)

    assert total == 23 and pages == 5
    assert [p.id for p in paged] == [p.id for p in everything]
    # newest first
    assert everything[0].price == Decimal("1022")

@pytest.mark.asyncio
async def test_page_past_end_is_empty(session):
    owner = await add_owner(session)
    await add_properties(session, owner.id, [1, 2, 3])
    items, window = await properties.search_properties(session, PropertyFilter(page=9, page_size=2))
    assert items == []
    assert window.offset == 16

@pytest.mark.asyncio
async def test_update_replaces_fields_and_keeps_created_at(session):
    owner = await add_owner(session)
    prop = await properties.create_property(session, _payload(owner.id))
    created_at = prop.created_at
    before = datetime.now(timezone.utc)

    updated = await properties.update_property(session, prop.id, PropertyUpdate(
        id_owner=owner.id,
        name="Lake House",
        address="  1 Lake Road ",
        price=Decimal("650000"),
        image="https://img.example.com/lake.jpg",
    ))

    assert updated.name == "Lake House"
    assert updated.address == "1 Lake Road"
    assert updated.price == Decimal("650000")
    assert updated.created_at == created_at
    assert updated.updated_at >= before

@pytest.mark.asyncio
async def test_update_missing_returns_none(session):
    owner = await add_owner(session)
    assert await properties.update_property(session, "nope", _payload(owner.id)) is None

@pytest.mark.asyncio
async def test_update_checks_owner_and_name(session):
    owner = await add_owner(session)
    first = await properties.create_property(session, _payload(owner.id, name="First"))
    await properties.create_property(session, _payload(owner.id, name="Second"))

    with pytest.raises(ReferentialError):
        await properties.update_property(session, first.id, _payload("ghost", name="First"))
    with pytest.raises(ConflictError):
        await properties.update_property(session, first.id, _payload(owner.id, name="Second"))
    # keeping its own name is not a conflict
    same = await properties.update_property(session, first.id, _payload(owner.id, name="First", price=Decimal("1")))
    assert same.price == Decimal("1")

@pytest.mark.asyncio
async def test_delete(session):
    owner = await add_owner(session)
    prop = await properties.create_property(session, _payload(owner.id))
    assert await properties.delete_property(session, prop.id) is True
    assert await properties.delete_property(session, prop.id) is False
    assert await properties.count_properties(session) == 0

@pytest.mark.asyncio
async def test_pages_are_stable_when_timestamps_tie(session):
    owner = await add_owner(session)
    tied = await add_properties(session, owner.id, range(1, 8), step=timedelta(0))
    filters = PropertyFilter()

    everything, _ = await properties.search_properties(session, filters.model_copy(update={"page_size": 100}))
    paged = []
    for page in range(1, 4):
        items, _ = await properties.search_properties(session, filters.model_copy(update={"page": page, "page_size": 3}))
        paged.extend(items)

    assert [p.id for p in paged] == [p.id for p in everything]
    # equal created_at falls back to id, descending
    assert [p.id for p in everything] == sorted((p.id for p in tied), reverse=True)

@pytest.mark.asyncio
async def test_huge_page_is_empty_not_an_error(session):
    owner = await add_owner(session)
    await add_properties(session, owner.id, [1, 2, 3])
    items, window = await properties.search_properties(session, PropertyFilter(page=10**17, page_size=100))
    assert items == []
    assert window.page == 10**17
