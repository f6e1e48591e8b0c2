"""Canonical OData entity-set names shipped with d365mcp.

The list covers the public data entities most commonly queried through
``/data``. Deployments with custom entities extend it through the
``[entities] extra`` config list rather than editing this module.
"""

from __future__ import annotations

DEFAULT_ENTITIES: tuple[str, ...] = (
    # Customers and sales
    "CustomersV3",
    "CustomerGroups",
    "CustomerPostalAddresses",
    "CustomerPaymentJournalLines",
    "SalesOrderHeadersV2",
    "SalesOrderHeadersV4",
    "SalesOrderLines",
    "SalesOrderLinesV3",
    "SalesOrderPools",
    "SalesQuotationHeadersV2",
    "SalesQuotationLines",
    "SalesInvoiceHeaders",
    "SalesInvoiceLines",
    "ReturnOrderHeaders",
    "ReturnOrderLines",
    # Vendors and purchasing
    "VendorsV2",
    "VendorGroups",
    "VendorPostalAddresses",
    "VendorInvoiceHeaders",
    "VendorInvoiceLines",
    "PurchaseOrderHeadersV2",
    "PurchaseOrderLinesV2",
    "PurchaseRequisitionHeaders",
    "PurchaseRequisitionLines",
    # Products and inventory
    "ReleasedProductsV2",
    "ReleasedProductVariantsV2",
    "ProductsV2",
    "ProductCategories",
    "ProductCategoryAssignments",
    "ItemGroups",
    "InventorySitesV2",
    "Warehouses",
    "WarehouseLocations",
    "InventoryOnHandV2",
    "InventoryMovementJournalHeaders",
    "InventoryMovementJournalEntries",
    "UnitsOfMeasure",
    "UnitOfMeasureConversions",
    # Finance
    "LegalEntities",
    "MainAccounts",
    "FinancialDimensionValues",
    "LedgerJournalHeaders",
    "LedgerJournalLines",
    "GeneralJournalAccountEntries",
    "ExchangeRates",
    "Currencies",
    "PaymentTerms",
    "PaymentMethods",
    "TaxGroups",
    "TaxItemGroups",
    "FixedAssets",
    "BudgetRegisterEntries",
    # Projects
    "Projects",
    "ProjectContracts",
    "ProjectHourJournalLines",
    # Human resources
    "Workers",
    "Employees",
    "Positions",
    "PositionHierarchies",
    "PositionHierarchyTypes",
    "PositionWorkerAssignments",
    "Jobs",
    "Departments",
    "OperatingUnits",
    # Security and administration
    "SystemUsers",
    "SecurityRoles",
    "SecurityUserRoleAssociations",
    "SecurityDuties",
    "SecurityPrivileges",
    "NumberSequences",
    "DataManagementDefinitionGroups",
    "BatchJobs",
    # Addresses and parties
    "Addresses",
    "AddressCountryRegions",
    "AddressStates",
    "PartyContacts",
    "Contacts",
    "Sites",
    "DeliveryModes",
    "DeliveryTerms",
)
