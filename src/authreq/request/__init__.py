"""Token request builders and their validated parameter snapshots.

Structure:
    api_ids.py     - ApiId (request type identifier)
    state.py       - RequestState (mutable, owned by one builder)
    parameters.py  - AcquireTokenParameters snapshots (immutable)
    builder.py     - AcquireTokenParameterBuilder (fluent base + validation)
    silent.py      - AcquireTokenSilentParameterBuilder
    executor.py    - TokenExecutor protocol and TokenResult
"""

from authreq.request.api_ids import ApiId
from authreq.request.builder import AcquireTokenParameterBuilder, Validator
from authreq.request.executor import TokenExecutor, TokenResult
from authreq.request.parameters import AcquireTokenParameters, AcquireTokenSilentParameters
from authreq.request.silent import AcquireTokenSilentParameterBuilder
from authreq.request.state import RequestState

__all__ = [
    "AcquireTokenParameterBuilder",
    "AcquireTokenParameters",
    "AcquireTokenSilentParameterBuilder",
    "AcquireTokenSilentParameters",
    "ApiId",
    "RequestState",
    "TokenExecutor",
    "TokenResult",
    "Validator",
]
