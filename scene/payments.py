"""
Payment gateway integration

Stripe is used when STRIPE_SECRET_KEY is configured. Without it a disabled
gateway is installed, which rejects payment requests with
DependencyUnavailable so the rest of the API keeps working.
"""

import logging
import os

import stripe

from scene.errors import DependencyUnavailable, GatewayFailure

logger = logging.getLogger(__name__)


class StripeGateway:
    """Creates Stripe PaymentIntents for ticket purchases"""
    enabled = True
    name = 'stripe'

    def __init__(self, secret_key):
        stripe.api_key = secret_key

    def create_payment_intent(self, amount, currency, metadata=None):
        """
        Create a PaymentIntent and return its client secret.

        Args:
            amount: Amount in minor units (cents)
            currency: ISO currency code, e.g. 'usd'
            metadata: Optional dict attached to the intent

        Returns:
            str: The client secret the frontend uses to complete the payment
        """
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                metadata=metadata or {},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe PaymentIntent creation failed: {e}")
            raise GatewayFailure('Payment initiation failed')

        logger.info(f"Created PaymentIntent {intent.id} for {amount} {currency}")
        return intent.client_secret


class DisabledGateway:
    enabled = False
    name = 'disabled'

    def create_payment_intent(self, amount, currency, metadata=None):
        raise DependencyUnavailable('Payments not available: add STRIPE_SECRET_KEY to .env to enable payments')


def build_payment_gateway(secret_key=None):
    """Pick the gateway variant from configuration"""
    secret_key = secret_key or os.getenv('STRIPE_SECRET_KEY')
    if secret_key:
        return StripeGateway(secret_key)
    return DisabledGateway()
