"""Multi-tenant administration backend: users, roles, permissions, tenants."""
