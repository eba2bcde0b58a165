"""Error Hierarchy — verifies problem bodies, statuses and kinds.

Tests:
    - Client errors carry a human-readable detail and 400/404
    - Server errors carry only the generic detail and 500
    - to_problem() includes instance only when given
"""

from intranet_api.core.errors import (
    BackingStoreError, ErrorCategory, ErrorContext, ErrorKind,
    GENERIC_GATEWAY_DETAIL, MalformedPayloadError, MissingRoutingFieldError,
    ResourceNotFoundError, TargetNotFoundError, UnclassifiedGatewayError,
)


def test_target_not_found_problem_mentions_target():
    problem = TargetNotFoundError("P_FOOBAR").to_problem(instance="/Common/CallSP")
    assert problem == {
        "title": "Invalid API Call",
        "detail": "Invalid API Call: The target 'P_FOOBAR' was not found.",
        "status": 400,
        "code": "TARGET_NOT_FOUND",
        "instance": "/Common/CallSP",
    }


def test_target_not_found_records_target_in_context():
    ctx = ErrorContext(routing_value="FooBar")
    err = TargetNotFoundError("P_FOOBAR", ctx)
    assert err.context.target_name == "P_FOOBAR"
    assert err.context.routing_value == "FooBar"


def test_missing_routing_field_is_bad_request():
    err = MissingRoutingFieldError("FromApi")
    assert err.http_status == 400
    assert err.title == "Bad Request"
    assert err.category == ErrorCategory.VALIDATION
    assert err.kind == ErrorKind.MISSING_ROUTING_FIELD


def test_malformed_payload_detail_is_reason():
    err = MalformedPayloadError("Invalid JSON payload: Expecting value (line 1, column 1).")
    assert err.to_problem()["detail"].startswith("Invalid JSON payload")
    assert "instance" not in err.to_problem()


def test_backing_store_error_hides_driver_detail():
    err = BackingStoreError("execute", ErrorContext(debug_info={"driver_error": "secret"}))
    problem = err.to_problem()
    assert err.http_status == 500
    assert problem["detail"] == GENERIC_GATEWAY_DETAIL
    assert "secret" not in str(problem)


def test_unclassified_error_is_generic_500():
    err = UnclassifiedGatewayError()
    assert err.http_status == 500
    assert err.code == "INTERNAL_ERROR"
    assert err.kind == ErrorKind.UNCLASSIFIED_ERROR
    assert err.message == GENERIC_GATEWAY_DETAIL


def test_resource_not_found_is_404_without_gateway_kind():
    err = ResourceNotFoundError("Product", 7)
    assert err.http_status == 404
    assert err.message == "Product with ID 7 not found."
    assert err.kind is None
