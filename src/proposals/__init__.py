"""Sales proposal rendering and PDF pagination."""
