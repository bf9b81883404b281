"""
Catalog service: industries, niches, products, services.
- names are unique (deleted rows included), niches unique within their industry
- lookups by id or by name, soft-deleted rows invisible to reads
- industry delete refused while live niches remain
"""
import pytest

from catalog_admin.exceptions import ReferentialIntegrityError, UniqueConstraintViolation
from catalog_admin.schemas.catalog import CatalogItemCreate, NicheCreate
from catalog_admin.services import catalog_service


@pytest.mark.asyncio
async def test_create_and_lookup_by_id_or_name(db) -> None:
    created = await catalog_service.create_industry(
        db, CatalogItemCreate(name="Healthcare", description="Clinics and practices")
    )
    assert created.id.startswith("in_")
    assert created.deleted_at is None

    by_id = await catalog_service.get_industry(db, created.id)
    by_name = await catalog_service.get_industry(db, "Healthcare")
    assert by_id.id == by_name.id == created.id
    assert await catalog_service.get_industry(db, "healthcare") is None


@pytest.mark.asyncio
async def test_duplicate_name_is_unique_violation(store) -> None:
    async with store.unit_of_work() as db:
        await catalog_service.create_product(db, CatalogItemCreate(name="Chatbot"))

    with pytest.raises(UniqueConstraintViolation) as exc:
        async with store.unit_of_work() as db:
            await catalog_service.create_product(db, CatalogItemCreate(name="Chatbot"))
    assert exc.value.message == "A product with that name already exists"

    async with store.unit_of_work() as db:
        assert len(await catalog_service.list_products(db)) == 1


@pytest.mark.asyncio
async def test_name_stays_taken_after_soft_delete(store) -> None:
    async with store.unit_of_work() as db:
        svc = await catalog_service.create_service(db, CatalogItemCreate(name="Onboarding"))
        assert await catalog_service.delete_service(db, svc.id) is True

    async with store.unit_of_work() as db:
        assert await catalog_service.get_service(db, svc.id) is None
        assert await catalog_service.list_services(db) == []

    with pytest.raises(UniqueConstraintViolation):
        async with store.unit_of_work() as db:
            await catalog_service.create_service(db, CatalogItemCreate(name="Onboarding"))


@pytest.mark.asyncio
async def test_search_is_case_insensitive_on_name_and_description(db) -> None:
    await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    await catalog_service.create_industry(db, CatalogItemCreate(name="Retail", description="Shops and HEALTH stores"))
    await catalog_service.create_industry(db, CatalogItemCreate(name="Logistics"))

    names = [i.name for i in await catalog_service.list_industries(db, search="health")]
    assert names == ["Healthcare", "Retail"]
    assert len(await catalog_service.list_industries(db, search="  ")) == 3


@pytest.mark.asyncio
async def test_niche_name_unique_per_industry(store) -> None:
    async with store.unit_of_work() as db:
        health = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
        pets = await catalog_service.create_industry(db, CatalogItemCreate(name="Pets"))
        dental = await catalog_service.create_niche(db, NicheCreate(name="Clinics", industry_id=health.id))
        vet = await catalog_service.create_niche(db, NicheCreate(name="Clinics", industry_id=pets.id))
    assert dental.industry_name == "Healthcare"
    assert vet.industry_name == "Pets"

    with pytest.raises(UniqueConstraintViolation):
        async with store.unit_of_work() as db:
            await catalog_service.create_niche(db, NicheCreate(name="Clinics", industry_id=health.id))

    async with store.unit_of_work() as db:
        only_pets = await catalog_service.list_niches(db, industry_id=pets.id)
        assert [n.id for n in only_pets] == [vet.id]


@pytest.mark.asyncio
async def test_niche_needs_live_industry(db) -> None:
    with pytest.raises(ReferentialIntegrityError):
        await catalog_service.create_niche(db, NicheCreate(name="Dental", industry_id="in_missing00000"))

    industry = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    await catalog_service.delete_industry(db, industry.id)
    with pytest.raises(ReferentialIntegrityError):
        await catalog_service.create_niche(db, NicheCreate(name="Dental", industry_id=industry.id))


@pytest.mark.asyncio
async def test_industry_delete_guarded_by_live_niches(db) -> None:
    industry = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    niche = await catalog_service.create_niche(db, NicheCreate(name="Dental", industry_id=industry.id))

    with pytest.raises(ReferentialIntegrityError):
        await catalog_service.delete_industry(db, industry.id)
    assert await catalog_service.get_industry(db, industry.id) is not None

    assert await catalog_service.delete_niche(db, niche.id) is True
    assert await catalog_service.delete_industry(db, industry.id) is True
    assert await catalog_service.get_industry(db, industry.id) is None


@pytest.mark.asyncio
async def test_soft_delete_is_idempotent(db) -> None:
    product = await catalog_service.create_product(db, CatalogItemCreate(name="Voice agent"))
    assert await catalog_service.delete_product(db, product.id) is True
    assert await catalog_service.delete_product(db, product.id) is True
    assert await catalog_service.delete_product(db, "pd_doesnotexist") is False


@pytest.mark.asyncio
async def test_same_niche_name_in_two_industries(db) -> None:
    health = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    legal = await catalog_service.create_industry(db, CatalogItemCreate(name="Legal"))
    first = await catalog_service.create_niche(db, NicheCreate(industry_id=health.id, name="Small Practices"))
    second = await catalog_service.create_niche(db, NicheCreate(industry_id=legal.id, name="Small Practices"))

    assert (await catalog_service.get_niche(db, "Small Practices")).id == first.id
    narrowed = await catalog_service.get_niche(db, "Small Practices", industry_id=legal.id)
    assert narrowed.id == second.id
    assert narrowed.industry_name == "Legal"
    assert await catalog_service.get_niche(db, first.id, industry_id=legal.id) is None
