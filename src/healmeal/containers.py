"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from healmeal.adapters.local_storage import JsonFileStorage
from healmeal.adapters.recipe_client import HttpxRecipeClient
from healmeal.adapters.supabase_auth_client import SupabaseAuthClient
from healmeal.adapters.supabase_meal_log_repository import SupabaseMealLogRepository
from healmeal.adapters.supabase_meal_repository import SupabaseMealRepository
from healmeal.adapters.supabase_order_repository import SupabaseOrderRepository
from healmeal.adapters.supabase_profile_repository import SupabaseProfileRepository
from healmeal.config import Settings, parse_dwell_seconds
from healmeal.services.cart import CartService
from healmeal.services.catalog import CatalogService
from healmeal.services.delivery import DEFAULT_DWELL_SECONDS, DeliveryService
from healmeal.services.meal_logs import MealLogService
from healmeal.services.notifications import NotificationService
from healmeal.services.orders import OrderService
from healmeal.services.profiles import ProfileService
from healmeal.services.recipes import RecipeService
from healmeal.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    notification_service: NotificationService
    user_service: UserService
    profile_service: ProfileService
    catalog_service: CatalogService
    cart_service: CartService
    order_service: OrderService
    delivery_service: DeliveryService
    meal_log_service: MealLogService
    close_resources: Callable[[], Awaitable[None]]


def wire_auth_listeners(container: AppContainer) -> None:
    """Register per-user services for sign-in and sign-out."""
    container.user_service.listeners.extend(
        [
            container.catalog_service.on_auth_change,
            container.profile_service.on_auth_change,
            container.order_service.on_auth_change,
            container.meal_log_service.on_auth_change,
            container.delivery_service.on_auth_change,
        ]
    )
    container.order_service.order_placed_hooks.append(container.delivery_service.track)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    notification_service = NotificationService()
    recipe_client = HttpxRecipeClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
    )
    catalog_service = CatalogService(
        recipe_service=RecipeService(recipe_client),
        meal_repository=SupabaseMealRepository(supabase_client),
        notifications=notification_service,
        recommendation_count=resolved_settings.recommendation_count,
    )
    user_service = UserService(
        SupabaseAuthClient(supabase_client), notification_service
    )
    profile_service = ProfileService(
        SupabaseProfileRepository(supabase_client), notification_service
    )
    order_service = OrderService(
        repository=SupabaseOrderRepository(supabase_client),
        notifications=notification_service,
        delivery_fee=resolved_settings.delivery_fee,
        delivery_eta_minutes=resolved_settings.delivery_eta_minutes,
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        catalog=catalog_service,
        notifications=notification_service,
    )
    delivery_service = DeliveryService(
        order_service=order_service,
        meal_log_service=meal_log_service,
        notifications=notification_service,
        dwell_seconds=parse_dwell_seconds(resolved_settings.delivery_dwell_seconds)
        or DEFAULT_DWELL_SECONDS,
    )
    cart_service = CartService(
        store=JsonFileStorage(Path(resolved_settings.local_storage_path)),
        notifications=notification_service,
        order_service=order_service,
        user_service=user_service,
    )

    async def close_resources() -> None:
        delivery_service.stop_all()
        await recipe_client.close()

    container = AppContainer(
        settings=resolved_settings,
        notification_service=notification_service,
        user_service=user_service,
        profile_service=profile_service,
        catalog_service=catalog_service,
        cart_service=cart_service,
        order_service=order_service,
        delivery_service=delivery_service,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
    wire_auth_listeners(container)
    return container
