import json
import logging

from fakes import ACCOUNT_1, HAT_1_1, HAT_1_2

from hats_modules import StakingEligibilityClient
from hats_modules.logging_utils import (
    LOGGER_NAME,
    ModuleLogContext,
    StructuredJsonFormatter,
    configure_logging,
    module_logger,
)


def _lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_configure_logging_writes_json_lines(tmp_path):
    log_file = tmp_path / "logs" / "hats.jsonl"
    logger = configure_logging("debug", log_file=log_file)

    module_logger(f"{LOGGER_NAME}.modules.base", "staking").bind(operation="stake", tx_hash="0xabc").info(
        "Transaction submitted"
    )

    assert logger.level == logging.DEBUG
    record = _lines(log_file)[-1]
    assert record["message"] == "Transaction submitted"
    assert record["level"] == "INFO"
    assert record["logger"] == "hats_modules.modules.base"
    assert record["module"] == "staking"
    assert record["operation"] == "stake"
    assert record["tx_hash"] == "0xabc"
    assert "target" not in record


def test_bind_returns_new_adapter():
    base = module_logger(LOGGER_NAME, "jokerace")
    bound = base.bind(target="0x01", contest="0x02")
    rebound = bound.bind(target="0x03")

    assert base.context == ModuleLogContext(module="jokerace")
    assert bound.context.target == "0x01"
    assert rebound.context.target == "0x03"
    assert rebound.context.to_dict() == {"module": "jokerace", "target": "0x03", "contest": "0x02"}


def test_transactions_log_their_context(chain, tmp_path):
    log_file = tmp_path / "hats.jsonl"
    configure_logging("info", log_file=log_file)
    client = StakingEligibilityClient(chain.connection(), chain.connection())

    client.create_instance(
        account=ACCOUNT_1,
        hat_id=HAT_1_1,
        min_stake=1,
        judge_hat=HAT_1_1,
        recipient_hat=HAT_1_2,
        cooldown_period=3600,
        token=chain.deploy_token().address,
    )

    records = _lines(log_file)
    submitted = next(record for record in records if record["message"] == "Transaction submitted")
    deployed = next(record for record in records if record["message"] == "Module instance deployed")
    assert submitted["module"] == "staking"
    assert submitted["operation"] == "createHatsModule"
    assert submitted["target"] == client.factory_address
    assert deployed["tx_hash"] == submitted["tx_hash"]
    assert deployed["hat_id"] == HAT_1_1


def test_reconfiguring_replaces_handlers():
    configure_logging()
    logger = configure_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert configure_logging("chatty").level == logging.INFO


def test_formatter_without_context():
    record = logging.LogRecord("hats_modules", logging.ERROR, __file__, 1, "boom %s", ("now",), None)
    payload = json.loads(StructuredJsonFormatter().format(record))
    assert payload["message"] == "boom now"
    assert "module" not in payload
    assert "tx_hash" not in payload
