"""HTTP middleware: request body size limit and request ID.

Applied in create_app(); order matters (first added = outermost).
"""

from jobboard.middleware.request_id import RequestIDMiddleware
from jobboard.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
