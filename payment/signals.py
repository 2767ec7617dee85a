from django.dispatch import Signal

# sender: Payment class; kwargs: payment, booking, actor
payment_confirmed = Signal()
