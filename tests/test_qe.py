import pytest

from supertd.events import Step
from supertd.qe import evaluate_qe


@pytest.mark.asyncio
@pytest.mark.parametrize("expect", [True, "value", 3])
async def test_evaluate_qe_without_service_is_false(expect):
    assert await evaluate_qe(123, "universe", "param", expect, Step.BTD) is False


@pytest.mark.asyncio
async def test_evaluate_qe_rejects_other_types():
    with pytest.raises(TypeError):
        await evaluate_qe(123, "universe", "param", 1.5, Step.RANKER)