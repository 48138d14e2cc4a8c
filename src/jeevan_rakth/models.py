from django.conf import settings
from django.db import models


class Product(models.Model):
    """
    A stocked item that can be ordered.

    ``stock`` is only ever changed through a relative decrement guarded by a
    sufficiency check, see ``jeevan_rakth.transactions.place_order``.
    """

    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=64, unique=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=["name"], name="product_name_idx")]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0), name="product_stock_non_negative"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sku} ({self.stock})"


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING"
        PLACED = "PLACED"
        CANCELLED = "CANCELLED"

    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders"
    )
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="orders")
    quantity = models.PositiveIntegerField(default=1)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["buyer", "created_at"], name="order_buyer_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} {self.status} ({self.total})"


class Payment(models.Model):
    class Status(models.TextChoices):
        AUTHORIZED = "AUTHORIZED"
        CAPTURED = "CAPTURED"
        FAILED = "FAILED"
        REFUNDED = "REFUNDED"

    order = models.OneToOneField(Order, on_delete=models.PROTECT, related_name="payment")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    provider = models.CharField(max_length=64)
    reference = models.CharField(max_length=128, unique=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.AUTHORIZED
    )
    processed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=["status"], name="payment_status_idx")]

    def __str__(self) -> str:
        return f"{self.reference} {self.status} ({self.amount})"
