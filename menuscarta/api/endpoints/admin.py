"""Superadmin tenant management endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menuscarta.auth import get_admin_session
from menuscarta.core.security import SessionData
from menuscarta.db.session import get_db
from menuscarta.schemas.restaurant import (
    RestaurantCreate,
    RestaurantListResponse,
    RestaurantMutationResponse,
    RestaurantResponse,
    RestaurantUpdate,
)
from menuscarta.services.restaurant_service import (
    cancel_restaurant,
    create_restaurant,
    list_restaurants,
    update_restaurant,
)

router: APIRouter = APIRouter()


@router.get("/restaurants", response_model=RestaurantListResponse)
def get_restaurants(
    db: Session = Depends(get_db),
    _admin: SessionData = Depends(get_admin_session),
) -> RestaurantListResponse:
    """List every tenant except the superadmin account."""
    return RestaurantListResponse(
        restaurants=[RestaurantResponse.model_validate(row) for row in list_restaurants(db)]
    )


@router.post("/restaurants", response_model=RestaurantMutationResponse, status_code=status.HTTP_201_CREATED)
def post_restaurant(
    payload: RestaurantCreate,
    db: Session = Depends(get_db),
    _admin: SessionData = Depends(get_admin_session),
) -> RestaurantMutationResponse:
    restaurant = create_restaurant(db, payload)
    return RestaurantMutationResponse(restaurant=RestaurantResponse.model_validate(restaurant))


@router.patch("/restaurants/{restaurant_id}", response_model=RestaurantMutationResponse)
def patch_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    db: Session = Depends(get_db),
    _admin: SessionData = Depends(get_admin_session),
) -> RestaurantMutationResponse:
    restaurant = update_restaurant(db, restaurant_id, payload)
    return RestaurantMutationResponse(restaurant=RestaurantResponse.model_validate(restaurant))


@router.delete("/restaurants/{restaurant_id}", response_model=RestaurantMutationResponse)
def delete_restaurant(
    restaurant_id: int,
    db: Session = Depends(get_db),
    _admin: SessionData = Depends(get_admin_session),
) -> RestaurantMutationResponse:
    """Soft delete: the tenant is marked cancelled."""
    restaurant = cancel_restaurant(db, restaurant_id)
    return RestaurantMutationResponse(restaurant=RestaurantResponse.model_validate(restaurant))
