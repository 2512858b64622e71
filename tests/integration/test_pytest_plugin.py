TEST_MODULE = """
import httpx
from pytest_httpspec import HttpxTransport


def mock(handler):
    return HttpxTransport(httpx.MockTransport(handler))


def test_uses_base_uri(http_spec):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    http_spec(transport=mock(handler)).path("ping").expect_status(200).execute()

    assert str(seen[0].url) == "http://api.local/v1/ping"


def test_failure_reported(http_spec):
    spec = http_spec(transport=mock(lambda request: httpx.Response(500)))
    spec.expect_status(200).expect_body("ok").execute()
"""


def test_ini_base_uri_and_failure_report(pytester):
    pytester.makeini(
        """
        [pytest]
        httpspec_base_uri = http://api.local/v1
        """
    )
    pytester.makepyfile(test_module=TEST_MODULE)

    result = pytester.runpytest_subprocess()

    result.assert_outcomes(passed=1, failed=1)
    result.stdout.fnmatch_lines(
        [
            "*CombinedError*2 expectation(s) failed*",
            "*Status: Status code doesn't match: expected 200, got 500*",
        ]
    )


def test_ini_auth_strategy_from_conftest(pytester):
    pytester.makeini(
        """
        [pytest]
        httpspec_auth_strategy = bearer_login
        """
    )
    pytester.makeconftest(
        """
        def bearer_login(spec, credentials):
            spec.header("Authorization", f"Bearer {credentials}")
        """
    )
    pytester.makepyfile(
        """
        import httpx
        from pytest_httpspec import HttpxTransport

        def handler(request):
            status = 200 if request.headers.get("authorization") == "Bearer secret" else 401
            return httpx.Response(status)

        def test_login(http_spec):
            spec = http_spec("http://x/", transport=HttpxTransport(httpx.MockTransport(handler)))
            spec.login("secret").expect_status(200).execute()
        """
    )

    result = pytester.runpytest_subprocess()

    result.assert_outcomes(passed=1)


def test_invalid_timeout_option(pytester):
    pytester.makeini(
        """
        [pytest]
        httpspec_timeout = never
        """
    )
    pytester.makepyfile("def test_nothing():\n    pass\n")

    result = pytester.runpytest_subprocess()

    assert result.ret != 0
    assert "must be a number of seconds" in "\n".join(result.outlines + result.errlines)
