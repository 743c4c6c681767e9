import pytest

from src.wallet_tasks.application.executor import TaskExecutor
from src.wallet_tasks.domain.exceptions import TaskHandlerError, UnknownTaskTypeError
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_type import TaskType
from tests.doubles import WALLET, StubAnalysisProvider, make_task


@pytest.mark.asyncio
async def test_auto_save_message_and_data(executor: TaskExecutor) -> None:
    task = make_task(
        "t-1", task_type="AUTO_SAVE", parameters={"percentage": 10, "token": "USDT"}
    )

    result = await executor.execute(task)

    assert result.success is True
    assert (
        result.message
        == "Auto-save configured: 10% of incoming transactions will be saved in USDT."
    )
    assert result.data == {"percentage": 10, "token": "USDT", "action": "AUTO_SAVE"}


@pytest.mark.asyncio
async def test_auto_save_rejects_out_of_range_percentage(executor: TaskExecutor) -> None:
    task = make_task("t-1", task_type="AUTO_SAVE", parameters={"percentage": 0})

    with pytest.raises(TaskHandlerError, match="Invalid parameters for AUTO_SAVE"):
        await executor.execute(task)


@pytest.mark.asyncio
async def test_save_money_defaults_token(executor: TaskExecutor) -> None:
    task = make_task("t-1", task_type="SAVE_MONEY", parameters={"amount": "25"})

    result = await executor.execute(task)

    assert result.message == "Successfully saved 25 USDT to your savings account."
    assert result.data == {"amount": "25", "token": "USDT", "action": "SAVE_MONEY"}


@pytest.mark.asyncio
async def test_send_money_requires_recipient(executor: TaskExecutor) -> None:
    task = make_task("t-1", task_type="SEND_MONEY", parameters={"amount": "5", "token": "KAIA"})

    with pytest.raises(TaskHandlerError) as exc_info:
        await executor.execute(task)

    assert "SEND_MONEY" in str(exc_info.value)
    assert "recipient" in str(exc_info.value)


@pytest.mark.asyncio
async def test_send_money(executor: TaskExecutor) -> None:
    task = make_task(
        "t-1",
        task_type="SEND_MONEY",
        parameters={"amount": "5", "token": "KAIA", "recipient": "0xdef"},
    )

    result = await executor.execute(task)

    assert result.message == "Successfully sent 5 KAIA to 0xdef."
    assert result.data["recipient"] == "0xdef"


@pytest.mark.asyncio
async def test_set_subscription_reads_camel_case_service_address(executor: TaskExecutor) -> None:
    task = make_task(
        "t-1",
        task_type="SET_SUBSCRIPTION",
        parameters={"amount": "9.99", "serviceAddress": "0xnetflix"},
    )

    result = await executor.execute(task)

    assert (
        result.message
        == "Successfully set up monthly subscription for 9.99 to service 0xnetflix."
    )
    assert result.data == {
        "amount": "9.99",
        "frequency": "monthly",
        "serviceAddress": "0xnetflix",
        "action": "SET_SUBSCRIPTION",
    }


@pytest.mark.asyncio
async def test_check_balance_ignores_extra_parameters(executor: TaskExecutor) -> None:
    task = make_task("t-1", task_type="CHECK_BALANCE", parameters={"token": "USDT"})

    result = await executor.execute(task)

    assert result.message == "Balance check completed. Check your wallet for current balances."
    assert result.data == {"action": "CHECK_BALANCE"}


@pytest.mark.asyncio
async def test_optimize_yield_and_budget_limit(executor: TaskExecutor) -> None:
    yield_result = await executor.execute(
        make_task("t-1", task_type="OPTIMIZE_YIELD", parameters={"amount": 100})
    )
    budget_result = await executor.execute(
        make_task(
            "t-2",
            task_type="SET_BUDGET_LIMIT",
            parameters={"amount": "300", "frequency": "weekly"},
        )
    )

    assert yield_result.message == "Yield optimization scheduled for 100 USDT over 30d."
    assert budget_result.message == "Budget limit set: 300 USDT per weekly period."
    assert budget_result.data["action"] == "SET_BUDGET_LIMIT"


@pytest.mark.asyncio
async def test_analyze_spending_uses_provider(
    executor: TaskExecutor, provider: StubAnalysisProvider
) -> None:
    task = make_task(
        "t-1",
        task_type="ANALYZE_SPENDING",
        parameters={
            "analysisType": "savings",
            "transactions": [
                {"hash": "0x1", "from": WALLET, "to": "0xdef", "value": "10", "tokenSymbol": "USDT"}
            ],
        },
    )

    result = await executor.execute(task)

    wallet_address, transactions, analysis_type = provider.calls[0]
    assert wallet_address == WALLET
    assert analysis_type == "savings"
    assert transactions[0].from_address == WALLET
    assert transactions[0].token_symbol == "USDT"
    assert result.message == "Spending analysis completed successfully."
    assert result.data["action"] == "ANALYZE_SPENDING"
    assert result.data["analysis"]["confidence"] == 80


@pytest.mark.asyncio
async def test_analyze_spending_defaults_to_general_without_transactions(
    executor: TaskExecutor, provider: StubAnalysisProvider
) -> None:
    await executor.execute(make_task("t-1", task_type="ANALYZE_SPENDING"))

    assert provider.calls == [(WALLET, [], "general")]


@pytest.mark.asyncio
async def test_unknown_type_raises(executor: TaskExecutor) -> None:
    with pytest.raises(UnknownTaskTypeError) as exc_info:
        await executor.execute(make_task("t-1", task_type="UNKNOWN_X"))

    assert str(exc_info.value) == "Unknown task type: UNKNOWN_X"


@pytest.mark.asyncio
async def test_unregistered_known_type_is_unknown() -> None:
    executor = TaskExecutor()

    with pytest.raises(UnknownTaskTypeError, match="Unknown task type: CHECK_BALANCE"):
        await executor.execute(make_task("t-1", task_type="CHECK_BALANCE"))


@pytest.mark.asyncio
async def test_register_replaces_handler(executor: TaskExecutor) -> None:
    async def fake_balance(parameters, wallet_address) -> TaskResult:
        return TaskResult(success=True, message=f"{wallet_address} holds 42 USDT")

    executor.register(TaskType.CHECK_BALANCE, fake_balance)

    result = await executor.execute(make_task("t-1", task_type="CHECK_BALANCE"))

    assert result.message == f"{WALLET} holds 42 USDT"
