"""Infrastructure layer: database, authentication, HTTP API and outbound clients."""
