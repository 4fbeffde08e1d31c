# Event types that grant an entitlement. Everything else is acknowledged and ignored.

STRIPE_CHECKOUT_COMPLETED = "checkout.session.completed"

PAYSTACK_SUBSCRIPTION_CREATE = "subscription.create"
PAYSTACK_CHARGE_SUCCESS = "charge.success"
