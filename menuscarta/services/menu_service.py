"""Menu editing (categories, items) and the public menu view."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from menuscarta.core.errors import ValidationError
from menuscarta.core.themes import resolve_theme
from menuscarta.models.menu import Category, ItemIngredient, MenuItem
from menuscarta.models.promotion import ScheduledDiscount
from menuscarta.models.restaurant import Restaurant
from menuscarta.schemas.menu import (
    CategoryPayload,
    CategoryResponse,
    MenuItemPayload,
    MenuItemResponse,
    MenuResponse,
    PublicCategory,
    PublicMenuItem,
    PublicRestaurant,
)
from menuscarta.services import image_store
from menuscarta.services.inventory_service import list_unavailable_ids
from menuscarta.services.pricing import compute_price, validate_base_price, validate_percentage
from menuscarta.services.promotion_service import get_banner, list_scheduled_discounts
from menuscarta.services.restaurant_service import restaurant_currency, restaurant_timezone
from menuscarta.utils.time import utcnow

logger = logging.getLogger(__name__)


def _sort_order(position: int | None, sort_order: int | None, index: int) -> int:
    if position is not None:
        return position
    if sort_order is not None:
        return sort_order
    return index


def list_categories(db: Session, restaurant_id: int) -> list[Category]:
    return list(
        db.scalars(
            select(Category)
            .where(Category.restaurant_id == restaurant_id)
            .order_by(Category.sort_order.asc(), Category.id.asc())
        ).all()
    )


def category_responses(categories: list[Category]) -> list[CategoryResponse]:
    """Serialize in display order with ``position`` renumbered 0..n-1."""
    ordered = sorted(categories, key=lambda category: (category.sort_order, category.id))
    return [
        CategoryResponse(
            id=category.id,
            name=category.name,
            description=category.description,
            icon=category.icon,
            sort_order=category.sort_order,
            position=index,
            is_visible=category.is_visible,
        )
        for index, category in enumerate(ordered)
    ]


def save_categories(db: Session, restaurant: Restaurant, payloads: list[CategoryPayload]) -> list[Category]:
    """Upsert the full ordered category list; categories left out are deleted.

    Deleting a category removes its items and its scheduled discounts.
    """
    for index, payload in enumerate(payloads):
        if not payload.name.strip():
            raise ValidationError("El nombre de la categoría es requerido", field=f"categories[{index}].name")

    existing = {category.id: category for category in list_categories(db, restaurant.id)}
    kept_ids: set[int] = set()

    for index, payload in enumerate(payloads):
        category = existing.get(payload.id) if payload.id is not None else None
        if category is None:
            category = Category(restaurant_id=restaurant.id)
            db.add(category)
        else:
            kept_ids.add(category.id)
        category.name = payload.name.strip()
        category.description = payload.description or None
        category.icon = payload.icon or None
        category.sort_order = _sort_order(payload.position, payload.sort_order, index)
        category.is_visible = payload.is_visible

    removed_ids = [category_id for category_id in existing if category_id not in kept_ids]
    if removed_ids:
        db.execute(delete(ScheduledDiscount).where(ScheduledDiscount.category_id.in_(removed_ids)))
        for category_id in removed_ids:
            db.delete(existing[category_id])

    db.commit()
    logger.info(
        "[MENU] Saved %d categories (%d removed) for slug=%s",
        len(payloads),
        len(removed_ids),
        restaurant.slug,
    )
    return list_categories(db, restaurant.id)


def list_items(db: Session, restaurant_id: int, *, available_only: bool = False) -> list[MenuItem]:
    statement = (
        select(MenuItem)
        .options(selectinload(MenuItem.ingredient_links))
        .where(MenuItem.restaurant_id == restaurant_id)
        .order_by(MenuItem.sort_order.asc(), MenuItem.id.asc())
    )
    if available_only:
        statement = statement.where(MenuItem.is_available.is_(True))
    return list(db.scalars(statement).all())


def item_response(item: MenuItem) -> MenuItemResponse:
    base_price = float(item.base_price)
    return MenuItemResponse(
        id=item.id,
        category_id=item.category_id,
        name=item.name,
        description=item.description,
        base_price=base_price,
        price=base_price,
        discount_percentage=float(item.discount_percentage) if item.discount_percentage is not None else None,
        image_url=item.image_url,
        sort_order=item.sort_order,
        position=item.sort_order,
        is_available=item.is_available,
        is_promotion=item.is_promotion,
        calories=item.calories,
        preparation_time=item.preparation_time,
        spicy_level=item.spicy_level,
        is_vegetarian=item.is_vegetarian,
        is_vegan=item.is_vegan,
        is_gluten_free=item.is_gluten_free,
        allergens=item.allergens,
        ingredients=item.ingredient_ids,
    )


def _item_base_price(payload: MenuItemPayload, index: int) -> Decimal:
    raw = payload.base_price if payload.base_price is not None else payload.price
    if raw is None:
        raise ValidationError("El precio es requerido", field=f"items[{index}].base_price")
    return validate_base_price(raw, f"items[{index}].base_price")


def replace_items(db: Session, restaurant: Restaurant, payloads: list[MenuItemPayload]) -> list[MenuItem]:
    """Replace every item of the tenant with ``payloads``.

    Entries repeating a (category, name) pair are dropped, first one wins.
    Inline images are stored and images no longer referenced are deleted.
    A failed save removes the images it already wrote.
    """
    category_ids = set(db.scalars(select(Category.id).where(Category.restaurant_id == restaurant.id)).all())

    seen: set[tuple[int, str]] = set()
    accepted: list[tuple[int, MenuItemPayload, Decimal, Decimal | None]] = []
    for index, payload in enumerate(payloads):
        name = payload.name.strip()
        if not name:
            raise ValidationError("El nombre del producto es requerido", field=f"items[{index}].name")
        if payload.category_id not in category_ids:
            raise ValidationError(
                "La categoría no pertenece a este restaurante",
                field=f"items[{index}].category_id",
            )
        base_price = _item_base_price(payload, index)
        discount = validate_percentage(payload.discount_percentage, f"items[{index}].discount_percentage")

        key = (payload.category_id, name.lower())
        if key in seen:
            logger.warning(
                "[MENU] Duplicate item dropped: %r in category %s (slug=%s)",
                name,
                payload.category_id,
                restaurant.slug,
            )
            continue
        seen.add(key)
        accepted.append((index, payload, base_price, discount))

    previous_items = list_items(db, restaurant.id)
    previous_images = {item.image_url for item in previous_items if item.image_url}

    stored_urls: list[str] = []
    new_items: list[MenuItem] = []
    try:
        for index, payload, base_price, discount in accepted:
            image_url = payload.image_url or None
            if image_store.is_data_url(image_url):
                image_url = image_store.save_data_url(restaurant.slug, image_url, prefix="item")
                stored_urls.append(image_url)
            item = MenuItem(
                restaurant_id=restaurant.id,
                category_id=payload.category_id,
                name=payload.name.strip(),
                description=payload.description or None,
                base_price=base_price,
                discount_percentage=discount,
                image_url=image_url,
                sort_order=_sort_order(payload.position, payload.sort_order, index),
                is_available=payload.is_available,
                is_promotion=payload.is_promotion,
                calories=payload.calories,
                preparation_time=payload.preparation_time,
                spicy_level=payload.spicy_level,
                is_vegetarian=payload.is_vegetarian,
                is_vegan=payload.is_vegan,
                is_gluten_free=payload.is_gluten_free,
                allergens=payload.allergens,
            )
            item.ingredient_links = [
                ItemIngredient(ingredient_id=ingredient_id, is_optional=False)
                for ingredient_id in dict.fromkeys(value.strip() for value in payload.ingredients if value.strip())
            ]
            new_items.append(item)

        for item in previous_items:
            db.delete(item)
        db.flush()
        db.add_all(new_items)
        db.commit()
    except Exception:
        db.rollback()
        for url in stored_urls:
            image_store.delete_image(restaurant.slug, url)
        raise

    kept_images = {item.image_url for item in new_items if item.image_url}
    for url in previous_images - kept_images:
        image_store.delete_image(restaurant.slug, url)

    logger.info("[MENU] Saved %d items for slug=%s", len(new_items), restaurant.slug)
    return list_items(db, restaurant.id)


def build_public_menu(db: Session, restaurant: Restaurant, now: datetime | None = None) -> MenuResponse:
    """Visible categories and available items with prices derived at ``now``."""
    moment = now or utcnow()
    timezone_name = restaurant_timezone(restaurant)
    currency_code = restaurant_currency(restaurant)
    scheduled = list_scheduled_discounts(db, restaurant.id)
    unavailable = list_unavailable_ids(db, restaurant.id)
    unavailable_set = set(unavailable)

    items_by_category: dict[int, list[MenuItem]] = {}
    for item in list_items(db, restaurant.id, available_only=True):
        items_by_category.setdefault(item.category_id, []).append(item)

    categories: list[PublicCategory] = []
    for category in list_categories(db, restaurant.id):
        if not category.is_visible:
            continue
        public_items: list[PublicMenuItem] = []
        for item in items_by_category.get(category.id, []):
            quote = compute_price(
                item.base_price,
                item.discount_percentage,
                category_id=category.id,
                scheduled=scheduled,
                now=moment,
                timezone_name=timezone_name,
                currency_code=currency_code,
            )
            ingredient_ids = item.ingredient_ids
            public_items.append(
                PublicMenuItem(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    price=float(quote.base_price),
                    final_price=float(quote.final_price),
                    display_price=quote.display_price,
                    display_base_price=quote.display_base_price,
                    discount_percentage=(
                        float(item.discount_percentage) if item.discount_percentage is not None else None
                    ),
                    applied_discount_percentage=(
                        float(quote.applied_discount_percentage)
                        if quote.applied_discount_percentage is not None
                        else None
                    ),
                    discount_source=quote.discount_source,
                    scheduled_discount=quote.scheduled_discount_name,
                    image_url=item.image_url,
                    is_promotion=item.is_promotion,
                    calories=item.calories,
                    preparation_time=item.preparation_time,
                    spicy_level=item.spicy_level,
                    is_vegetarian=item.is_vegetarian,
                    is_vegan=item.is_vegan,
                    is_gluten_free=item.is_gluten_free,
                    allergens=item.allergens,
                    ingredients=ingredient_ids,
                    has_unavailable_ingredients=any(value in unavailable_set for value in ingredient_ids),
                )
            )
        categories.append(
            PublicCategory(
                id=category.id,
                name=category.name,
                description=category.description,
                icon=category.icon,
                items=public_items,
            )
        )

    return MenuResponse(
        restaurant=PublicRestaurant(
            name=restaurant.name,
            slug=restaurant.slug,
            logo_url=restaurant.logo_url,
            logo_style=restaurant.logo_style or "circular",
            theme_id=resolve_theme(restaurant.theme_id).theme.id,
            currency=currency_code,
            timezone=timezone_name,
        ),
        categories=categories,
        banner=get_banner(db, restaurant.id),
        unavailable_ingredients=unavailable,
        generated_at=moment,
    )
