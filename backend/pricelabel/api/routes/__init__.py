# API routes
from pricelabel.api.routes import health, labels

__all__ = ["health", "labels"]
