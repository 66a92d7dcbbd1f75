from bookingdesk.server.services.store import DemoStore, TenantStore, seed_tenant

__all__ = ["DemoStore", "TenantStore", "seed_tenant"]
