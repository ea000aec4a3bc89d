"""HTTP layer: routes, schemas, gate dependencies, exception handlers."""
