"""HTTP routers: work order pages and API, lookups, branding."""
