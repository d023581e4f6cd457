from subscriptions.application.services import SubscriptionService, UserService

subscription_service = SubscriptionService()
user_service = UserService(subscription_service)

__all__ = ["SubscriptionService", "UserService", "subscription_service", "user_service"]
