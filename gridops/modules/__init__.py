"""Resource managers. Each delegates every ownership decision to gridops.ownership."""
