"""Azure SQL managed instance provider."""

from sqlmi_broker.providers.azure.sql_gateway import AzureSqlManagedInstanceGateway

__all__: list[str] = ["AzureSqlManagedInstanceGateway"]
