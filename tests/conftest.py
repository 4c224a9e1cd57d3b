import pytest

from arith.arith_frontend import ExpressionParser, RecursiveDescent, ShuntingYard


@pytest.fixture(params=[RecursiveDescent, ShuntingYard], ids=["rd", "sy"])  # type: ignore[misc]
def expression_parser(request: pytest.FixtureRequest) -> ExpressionParser:
    return request.param()
