import pickle

from poolsnap.exceptions import ApprovalTypeQueryFailed, MulticallTransportError, PoolsnapValueError
from poolsnap.types.multicall import MulticallResult


def test_multicall_transport_error_pickling() -> None:
    original_exception = MulticallTransportError(error="connection refused")

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is MulticallTransportError
    assert unpickled_exception.error == "connection refused"
    assert unpickled_exception.message == "Multicall failed: connection refused"
    assert str(unpickled_exception) == "Multicall failed: connection refused"


def test_approval_type_query_failed_pickling() -> None:
    results = [MulticallResult(success=True, result=(0,)), MulticallResult(success=False)]
    original_exception = ApprovalTypeQueryFailed(results=results)

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is ApprovalTypeQueryFailed
    assert unpickled_exception.results == results
    assert unpickled_exception.message == original_exception.message


def test_value_error_message() -> None:
    exception = PoolsnapValueError(message="Bad value")
    unpickled_exception = pickle.loads(pickle.dumps(exception))
    assert unpickled_exception.message == "Bad value"
    assert str(unpickled_exception) == "Bad value"
