"""Application core: ports, shared state and the error hierarchy."""
