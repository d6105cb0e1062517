"""
CSGOEmpire 클라이언트 조합 테스트

REST/Socket.IO 구성 및 생명주기 테스트.
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from adapters.csgoempire.client import CSGOEmpire
from adapters.csgoempire.errors import SocketUnavailableError
from adapters.csgoempire.rest_client import EmpireRestClient
from adapters.csgoempire.ws_client import EmpireWsClient
from adapters.mock.empire_client import MockSocketIOClient
from core.config.loader import EmpireConfig
from core.types import SessionState


class TestCSGOEmpireConstruction:
    """생성 테스트"""

    def test_rest_client_always_created(self) -> None:
        empire = CSGOEmpire(api_key="test_key", websocket_enabled=False)

        assert isinstance(empire.api, EmpireRestClient)
        assert empire.api.headers["Authorization"] == "Bearer test_key"

    def test_no_api_key_sends_empty_authorization(self) -> None:
        empire = CSGOEmpire()

        assert empire.api.headers["Authorization"] == ""

    def test_realtime_created_when_enabled(self) -> None:
        empire = CSGOEmpire(api_key="test_key")

        assert isinstance(empire.realtime, EmpireWsClient)
        assert empire.realtime.rest_client is empire.api
        assert empire.realtime.verify_ssl is False

    def test_realtime_not_created_when_disabled(self) -> None:
        empire = CSGOEmpire(websocket_enabled=False)

        assert empire.realtime is None

    def test_from_secrets(self, temp_secrets_file: Path) -> None:
        empire = CSGOEmpire.from_secrets(temp_secrets_file)

        assert empire.api.api_key == "empire_api_key_12345"
        assert empire.api.base_url == "https://csgoempire.com/api/v2"
        assert empire.realtime is not None
        assert empire.realtime.ws_url == "wss://trade.csgoempire.com"
        assert empire.realtime.namespace == "/trade"
        assert empire.realtime.path == "/s/"

    def test_from_secrets_rest_only(self, temp_secrets_file_no_key: Path) -> None:
        empire = CSGOEmpire.from_secrets(temp_secrets_file_no_key)

        assert empire.api.api_key is None
        assert empire.realtime is None


class TestCSGOEmpireSocket:
    """소켓 뷰 접근 테스트"""

    def test_socket_unavailable_when_disabled(self) -> None:
        empire = CSGOEmpire(websocket_enabled=False)

        with pytest.raises(SocketUnavailableError):
            empire.socket

    def test_socket_unavailable_before_start(self) -> None:
        empire = CSGOEmpire(api_key="test_key")

        with pytest.raises(SocketUnavailableError):
            empire.socket

    @pytest.mark.asyncio
    async def test_wait_unavailable_when_disabled(self) -> None:
        empire = CSGOEmpire(websocket_enabled=False)

        with pytest.raises(SocketUnavailableError):
            await empire.wait()

    @pytest.mark.asyncio
    async def test_socket_available_after_start(self) -> None:
        empire = CSGOEmpire(api_key="test_key")
        mock_sio = MockSocketIOClient()
        empire.realtime._socket_factory = lambda: mock_sio

        await empire.start()
        received: list = []
        empire.socket.on("new_item", received.append)
        await mock_sio.trigger("new_item", {"id": 1})

        assert received == [{"id": 1}]
        assert mock_sio.connected is True


class TestCSGOEmpireLifecycle:
    """생명주기 테스트"""

    @pytest.mark.asyncio
    async def test_start_noop_when_disabled(self) -> None:
        empire = CSGOEmpire(websocket_enabled=False)

        await empire.start()

        assert empire.realtime is None

    @pytest.mark.asyncio
    async def test_handshake_through_facade(self, metadata_response: dict) -> None:
        """connect 시 facade의 REST 클라이언트로 metadata 조회"""
        empire = CSGOEmpire(api_key="test_key")
        mock_sio = MockSocketIOClient()
        empire.realtime._socket_factory = lambda: mock_sio

        with patch.object(
            empire.api, "get_metadata", AsyncMock(return_value=metadata_response)
        ) as mock_get_metadata:
            await empire.start()
            await mock_sio.trigger("connect")

        mock_get_metadata.assert_awaited_once()
        identify = mock_sio.emitted_events("identify")[0]
        assert identify["uid"] == metadata_response["user"]["id"]
        assert identify["authorizationToken"] == metadata_response["socket_token"]
        assert identify["signature"] == metadata_response["socket_signature"]
        assert empire.realtime.state == SessionState.IDENTIFIED

    @pytest.mark.asyncio
    async def test_from_config_namespace_and_path_used_for_connect(
        self, metadata_response: dict
    ) -> None:
        """EmpireConfig의 namespace/path가 Socket.IO 연결에 반영됨"""
        config = EmpireConfig(
            rest_url="https://example.test/api/v2",
            ws_url="wss://example.test",
            ws_namespace="/other",
            ws_path="/x/",
            api_key="test_key",
        )
        empire = CSGOEmpire.from_config(config)
        mock_sio = MockSocketIOClient()
        empire.realtime._socket_factory = lambda: mock_sio

        with patch.object(
            empire.api, "get_metadata", AsyncMock(return_value=metadata_response)
        ):
            await empire.start()
            await mock_sio.trigger("connect", namespace="/other")

        assert mock_sio.connect_kwargs["url"] == "wss://example.test"
        assert mock_sio.connect_kwargs["namespaces"] == ["/other"]
        assert mock_sio.connect_kwargs["socketio_path"] == "/x/"
        assert mock_sio.emitted[0][2] == "/other"
        assert empire.realtime.state == SessionState.IDENTIFIED

    @pytest.mark.asyncio
    async def test_context_manager_closes_both(self) -> None:
        empire = CSGOEmpire(api_key="test_key")
        mock_sio = MockSocketIOClient()
        empire.realtime._socket_factory = lambda: mock_sio

        with patch.object(empire.api, "close", AsyncMock()) as mock_close:
            async with empire:
                assert mock_sio.connected is True

        assert mock_sio.connected is False
        mock_close.assert_awaited_once()
        assert empire.realtime.state == SessionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_close_closes_http_even_if_stop_fails(self) -> None:
        empire = CSGOEmpire(api_key="test_key")

        with patch.object(empire.realtime, "stop", AsyncMock(side_effect=RuntimeError("boom"))), \
                patch.object(empire.api, "close", AsyncMock()) as mock_close:
            with pytest.raises(RuntimeError):
                await empire.close()

        mock_close.assert_awaited_once()
