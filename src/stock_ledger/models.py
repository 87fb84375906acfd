from django.db import models


class Product(models.Model):
    """
    A stocked item. ``current_stock`` is only written by the ledger.
    """

    product_id = models.AutoField(primary_key=True)
    product_name = models.CharField(max_length=255)
    current_stock = models.PositiveIntegerField(default=0)

    class Meta:
        managed = False
        db_table = "products"

    def __str__(self) -> str:
        return f"{self.product_name} ({self.current_stock})"

    def as_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "current_stock": self.current_stock,
        }


class BorrowingRecord(models.Model):
    """
    One loan of ``quantity_borrowed`` units of a product to a user.

    ``status`` only ever moves from OPEN to RETURNED.
    """

    class Status(models.TextChoices):
        OPEN = "open"
        RETURNED = "returned"

    borrow_id = models.AutoField(primary_key=True)
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        db_column="product_id",
        related_name="borrowing_records",
    )
    user_id = models.IntegerField()
    quantity_borrowed = models.PositiveIntegerField()
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.OPEN
    )

    class Meta:
        managed = False
        db_table = "borrowing_records"

    def __str__(self) -> str:
        return f"borrow #{self.borrow_id} ({self.status})"

    def as_dict(self) -> dict:
        return {
            "borrow_id": self.borrow_id,
            "product_id": self.product_id,
            "user_id": self.user_id,
            "quantity_borrowed": self.quantity_borrowed,
            "status": self.status,
        }


class ReturningRecord(models.Model):
    """
    Append-only log of stock given back against a borrow record.

    ``return_id`` is a surrogate key: the ORM needs a primary key even though
    rows are never addressed individually.
    """

    return_id = models.AutoField(primary_key=True)
    borrow = models.ForeignKey(
        BorrowingRecord,
        on_delete=models.PROTECT,
        db_column="borrow_id",
        related_name="returning_records",
    )
    quantity_returned = models.PositiveIntegerField()
    returned_by_user_id = models.IntegerField()

    class Meta:
        managed = False
        db_table = "returning_records"

    def as_dict(self) -> dict:
        return {
            "borrow_id": self.borrow_id,
            "quantity_returned": self.quantity_returned,
            "returned_by_user_id": self.returned_by_user_id,
        }
