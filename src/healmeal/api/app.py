"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from healmeal.api.admin import router as admin_router
from healmeal.api.models import (
    CartItemRequest,
    CheckoutRequest,
    ProfileUpdate,
    QuantityUpdate,
    SignInRequest,
    SignUpRequest,
    TrackerEntryRequest,
)
from healmeal.app_logging import configure_logging
from healmeal.containers import AppContainer
from healmeal.domain.cart import Cart
from healmeal.domain.meal_logs import MealLog
from healmeal.domain.meals import MealType
from healmeal.domain.models import UserRecord
from healmeal.domain.orders import Order
from healmeal.domain.profiles import UserProfile
from healmeal.services.catalog import CatalogService
from healmeal.services.profiles import ProfileValidationError


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_user(request: Request) -> UserRecord:
    user = _container(request).user_service.current_user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Please login first"
        )
    return user


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(ProfileValidationError)
    async def profile_validation_error(
        _request: Request, exc: ProfileValidationError
    ) -> JSONResponse:
        logger.info("Rejected profile update: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/sign-up")
    async def sign_up(payload: SignUpRequest, request: Request) -> dict[str, object]:
        """Register a new account and sign in."""
        user = _container(request).user_service.sign_up(
            payload.email, payload.password, payload.name
        )
        if user is None:
            raise _failure(request, status.HTTP_400_BAD_REQUEST)
        return {"user": user}

    @app.post("/auth/sign-in")
    async def sign_in(payload: SignInRequest, request: Request) -> dict[str, object]:
        """Sign in with email and password."""
        user = _container(request).user_service.sign_in(
            payload.email, payload.password
        )
        if user is None:
            raise _failure(request, status.HTTP_401_UNAUTHORIZED)
        return {"user": user}

    @app.post("/auth/sign-out")
    async def sign_out(request: Request) -> dict[str, str]:
        """Sign out and stop delivery tracking."""
        _container(request).user_service.sign_out()
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(
        request: Request, user: UserRecord = Depends(_require_user)
    ) -> dict[str, object]:
        """Return the signed-in user's profile."""
        profile = _container(request).profile_service.profile or UserProfile(
            id=user.id, name=user.name or ""
        )
        return {"profile": _profile_payload(profile)}

    @app.put("/profile")
    async def update_profile(
        payload: ProfileUpdate,
        request: Request,
        user: UserRecord = Depends(_require_user),
    ) -> dict[str, object]:
        """Validate and save the profile form."""
        profile = _container(request).profile_service.save(
            UserProfile(
                id=user.id,
                name=payload.name,
                age=payload.age,
                height_cm=payload.height,
                weight_kg=payload.weight,
                gender=payload.gender,
                conditions=tuple(payload.conditions),
                allergies=tuple(payload.allergies),
                dietary_preferences=tuple(payload.dietary_preferences),
            )
        )
        if profile is None:
            raise _failure(request, status.HTTP_502_BAD_GATEWAY)
        return {"profile": _profile_payload(profile)}

    @app.get("/meals", dependencies=[Depends(_require_user)])
    async def list_meals(
        request: Request, meal_type: MealType | None = None
    ) -> dict[str, object]:
        """Return meal suggestions for the signed-in user's profile."""
        state_container = _container(request)
        profile = state_container.profile_service.profile
        if profile is None or not profile.is_complete:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Complete your health profile to get meal suggestions",
            )
        meals = await state_container.catalog_service.recommend(profile, meal_type)
        return {"meals": meals}

    @app.get("/cart")
    async def get_cart(request: Request) -> dict[str, object]:
        """Return the cart with resolved meal names."""
        state_container = _container(request)
        return _cart_payload(
            state_container.cart_service.cart, state_container.catalog_service
        )

    @app.post("/cart/items")
    async def add_cart_item(
        payload: CartItemRequest, request: Request
    ) -> dict[str, object]:
        """Add a listed meal to the cart."""
        state_container = _container(request)
        meal = state_container.catalog_service.get_meal(payload.meal_id)
        if meal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        if not state_container.cart_service.add_item(meal, payload.quantity):
            raise _failure(request, status.HTTP_400_BAD_REQUEST)
        return _cart_payload(
            state_container.cart_service.cart, state_container.catalog_service
        )

    @app.patch("/cart/items/{meal_id}")
    async def update_cart_item(
        meal_id: str, payload: QuantityUpdate, request: Request
    ) -> dict[str, object]:
        """Set the quantity of a cart line; zero removes it."""
        state_container = _container(request)
        state_container.cart_service.set_quantity(meal_id, payload.quantity)
        return _cart_payload(
            state_container.cart_service.cart, state_container.catalog_service
        )

    @app.delete("/cart/items/{meal_id}")
    async def remove_cart_item(meal_id: str, request: Request) -> dict[str, object]:
        """Remove a cart line."""
        state_container = _container(request)
        state_container.cart_service.remove_item(meal_id)
        return _cart_payload(
            state_container.cart_service.cart, state_container.catalog_service
        )

    @app.delete("/cart")
    async def clear_cart(request: Request) -> dict[str, object]:
        """Empty the cart."""
        state_container = _container(request)
        state_container.cart_service.clear()
        return _cart_payload(
            state_container.cart_service.cart, state_container.catalog_service
        )

    @app.post("/checkout", status_code=status.HTTP_201_CREATED)
    async def checkout(payload: CheckoutRequest, request: Request) -> dict[str, object]:
        """Place an order for the cart contents."""
        state_container = _container(request)
        order = state_container.cart_service.checkout(
            payload.delivery_address, payload.payment_method
        )
        if order is None:
            raise _failure(request, status.HTTP_400_BAD_REQUEST)
        return _order_payload(order, state_container)

    @app.get("/orders", dependencies=[Depends(_require_user)])
    async def list_orders(request: Request) -> dict[str, object]:
        """Return the order history, most recent first."""
        return {"orders": _container(request).order_service.orders}

    @app.get("/orders/{order_id}", dependencies=[Depends(_require_user)])
    async def order_detail(order_id: UUID, request: Request) -> dict[str, object]:
        """Return an order with its receipt and delivery timeline."""
        state_container = _container(request)
        order = state_container.order_service.get_order(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _order_payload(order, state_container)

    @app.post("/orders/{order_id}/tracking", dependencies=[Depends(_require_user)])
    async def resume_tracking(order_id: UUID, request: Request) -> dict[str, object]:
        """Turn live delivery updates on."""
        state_container = _container(request)
        order = state_container.order_service.get_order(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        state_container.delivery_service.track(order)
        tracker = state_container.delivery_service.set_live(order_id, live=True)
        return {"order_id": order_id, "status": tracker.status, "live": tracker.live}

    @app.delete("/orders/{order_id}/tracking", dependencies=[Depends(_require_user)])
    async def pause_tracking(order_id: UUID, request: Request) -> dict[str, object]:
        """Turn live delivery updates off."""
        tracker = _container(request).delivery_service.set_live(order_id, live=False)
        if tracker is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"order_id": order_id, "status": tracker.status, "live": tracker.live}

    @app.post(
        "/orders/{order_id}/tracking/advance", dependencies=[Depends(_require_user)]
    )
    async def advance_tracking(order_id: UUID, request: Request) -> dict[str, object]:
        """Move an order one delivery step forward."""
        state_container = _container(request)
        order = state_container.order_service.get_order(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        tracker = state_container.delivery_service.track(order)
        tracker.advance()
        return {"order_id": order_id, "status": tracker.status, "live": tracker.live}

    @app.get("/tracker/{log_date}", dependencies=[Depends(_require_user)])
    async def tracker_day(log_date: date, request: Request) -> dict[str, object]:
        """Return the log and nutrition totals for a date."""
        state_container = _container(request)
        log = state_container.meal_log_service.get_by_date(log_date)
        return {
            "date": log_date,
            "log": _log_payload(log, state_container.catalog_service) if log else None,
            "totals": state_container.meal_log_service.daily_totals(log_date),
        }

    @app.post(
        "/tracker/entries",
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(_require_user)],
    )
    async def add_tracker_entry(
        payload: TrackerEntryRequest, request: Request
    ) -> dict[str, object]:
        """Log a meal for a date."""
        state_container = _container(request)
        log = state_container.meal_log_service.add_entry(
            payload.meal_id, payload.date, payload.meal_type, payload.notes
        )
        if log is None:
            raise _failure(request, status.HTTP_502_BAD_GATEWAY)
        return {"log": _log_payload(log, state_container.catalog_service)}

    @app.delete(
        "/tracker/{log_id}/entries/{meal_id}", dependencies=[Depends(_require_user)]
    )
    async def remove_tracker_entry(
        log_id: str, meal_id: str, request: Request
    ) -> dict[str, str]:
        """Remove the first entry of a meal from a log."""
        if not _container(request).meal_log_service.remove_entry(log_id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.get("/notifications")
    async def notifications(request: Request) -> dict[str, object]:
        """Return and clear pending notices."""
        return {"notices": _container(request).notification_service.drain()}

    return app


def _failure(request: Request, status_code: int) -> HTTPException:
    pending = _container(request).notification_service.pending()
    detail = pending[-1].description if pending else "Request failed"
    return HTTPException(status_code=status_code, detail=detail)


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return {
        "id": profile.id,
        "name": profile.name,
        "age": profile.age,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "gender": profile.gender,
        "bmi": profile.bmi,
        "conditions": list(profile.conditions),
        "allergies": list(profile.allergies),
        "dietary_preferences": list(profile.dietary_preferences),
        "is_complete": profile.is_complete,
    }


def _cart_payload(cart: Cart, catalog: CatalogService) -> dict[str, object]:
    return {
        "items": [
            {
                "meal_id": item.meal_id,
                "name": catalog.describe(item.meal_id),
                "quantity": item.quantity,
                "price": item.price,
                "restaurant_id": item.restaurant_id,
                "line_total": round(item.line_total, 2),
            }
            for item in cart.items
        ],
        "total_price": cart.total_price,
        "total_quantity": cart.total_quantity,
    }


def _order_payload(order: Order, container: AppContainer) -> dict[str, object]:
    tracker = container.delivery_service.tracker(order.id)
    return {
        "order": order,
        "items": [
            {
                "meal_id": item.meal_id,
                "name": container.catalog_service.describe(item.meal_id),
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in order.items
        ],
        "receipt": container.order_service.receipt(order),
        "timeline": container.order_service.timeline(order),
        "live": bool(tracker and tracker.live),
    }


def _log_payload(log: MealLog, catalog: CatalogService) -> dict[str, object]:
    return {
        "id": log.id,
        "date": log.date,
        "persisted": log.persisted,
        "meals": [
            {
                "meal_id": entry.meal_id,
                "name": catalog.describe(entry.meal_id),
                "meal_type": entry.meal_type,
                "time_consumed": entry.time_consumed,
                "notes": entry.notes,
            }
            for entry in log.meals
        ],
    }
