"""Adapters binding the domain ports to concrete transports and stores."""
