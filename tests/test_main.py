from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ircconnect.config.model import Credentials
from ircconnect.irc import notifications as nt
from ircconnect.irc.identity import credentials_to_id
from ircconnect.irc.models import ConnectionState
from ircconnect.main import LoggingConsumer, build_parser, check_configuration, main


def _config(tmp_path, servers):
    path = tmp_path / "ircconnect.conf"
    path.write_text(json.dumps({"servers": servers}), encoding="utf-8")
    return str(path)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.config == "ircconnect.conf"
    assert args.timeout_ms == 1000
    assert args.check is False


def test_check_configuration_valid(tmp_path):
    path = _config(tmp_path, [{"nickname": "n", "server": "s"}])
    assert check_configuration(path) == 0


def test_check_configuration_invalid(tmp_path):
    path = _config(tmp_path, [{"nickname": "", "server": "s"}])
    assert check_configuration(path) == 1


@pytest.mark.asyncio
async def test_main_check_flag(tmp_path):
    path = _config(tmp_path, [{"nickname": "n", "server": "s"}])
    assert await main(["--config", path, "--check"]) == 0


@pytest.mark.asyncio
async def test_main_missing_config_logs_error(tmp_path):
    with patch("ircconnect.main.log_error") as mock_log_error:
        code = await main(["--config", str(tmp_path / "absent.conf")])
    assert code == 1
    mock_log_error.assert_called_once()


@pytest.mark.asyncio
async def test_main_connects_every_server_and_shuts_down(tmp_path):
    path = _config(
        tmp_path,
        [{"nickname": "a", "server": "one"}, {"nickname": "b", "server": "two"}],
    )
    manager = MagicMock()
    manager.connect = AsyncMock()
    manager.shutdown = AsyncMock()
    manager.active_sessions = 0
    with patch("ircconnect.main.ConnectionManager", return_value=manager) as factory:
        code = await main(["--config", path, "--timeout-ms", "250"])
    assert code == 0
    assert factory.call_args.kwargs["timeout_ms"] == 250
    nicks = [c.args[0].nickname for c in manager.connect.await_args_list]
    assert nicks == ["a", "b"]
    manager.shutdown.assert_awaited_once()


def test_logging_consumer_keeps_registry_behaviour():
    consumer = LoggingConsumer()
    creds = Credentials(nickname="me", server="s")
    cid = credentials_to_id(creds)
    state = ConnectionState(id=cid, credentials=creds)
    consumer(nt.ConnectionPending(connection_id=cid, connection=state))
    consumer(nt.DirectMessageReceived(connection_id=cid, sender="bob", message="hi"))
    consumer(nt.ChannelMessageReceived(connection_id=cid, channel="#a", sender="bob", message="yo"))
    (conversation,) = consumer.lookup(cid).conversations
    assert conversation.name == "bob"
