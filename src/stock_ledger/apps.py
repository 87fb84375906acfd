from django.apps import AppConfig


class StockLedgerConfig(AppConfig):
    name = "stock_ledger"
    verbose_name = "Stock ledger"
    default_auto_field = "django.db.models.AutoField"
