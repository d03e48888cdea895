from rewriter.models import (
    Operation,
    ProcessRequest,
    ProcessResponse,
    ErrorResponse,
    TransformError,
    TransformErrorKind,
)
from rewriter.url_utils import transform
