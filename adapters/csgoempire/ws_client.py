"""
CSGOEmpire Socket.IO 클라이언트

connect 이벤트마다 REST metadata 조회 → identify 전송으로 세션 인증.
외부에는 구독 전용 SocketView만 노출 (identify 채널은 내부 전용).
IEmpireWsClient Protocol 준수.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable

import socketio

from adapters.csgoempire.errors import InvalidEventPayload, SocketUnavailableError
from adapters.csgoempire.models import InitEvent, build_identify_payload
from core.constants import Defaults, EmpireEndpoints, SocketEvents
from core.types import SessionState

logger = logging.getLogger(__name__)


# 콜백 타입 정의
EventHandler = Callable[..., Any]
StateChangeCallback = Callable[[SessionState], Awaitable[None]]
SocketFactory = Callable[[], socketio.AsyncClient]

# 내부에서 직접 처리하는 이벤트 (구독자에게는 처리 후 전달)
INTERNAL_EVENTS = (SocketEvents.CONNECT, SocketEvents.DISCONNECT, SocketEvents.INIT)


class SocketView:
    """구독 전용 소켓 뷰

    이벤트 핸들러 등록만 허용하고 emit은 노출하지 않음.
    같은 이벤트에 여러 핸들러 등록 가능 (등록 순서대로 호출).
    """

    def __init__(self, manager: "EmpireWsClient"):
        self._manager = manager

    def on(self, event: str, handler: EventHandler) -> EventHandler:
        """이벤트 핸들러 등록

        Args:
            event: 이벤트 이름
            handler: 동기 함수 또는 코루틴 함수

        Returns:
            등록한 handler (데코레이터 체이닝용)
        """
        self._manager._add_listener(event, handler)
        return handler

    @property
    def connected(self) -> bool:
        """전송 계층 연결 여부"""
        return self._manager.connected

    @property
    def state(self) -> SessionState:
        """현재 세션 상태"""
        return self._manager.state


class EmpireWsClient:
    """CSGOEmpire 실시간 세션 매니저

    상태 전이:
    - DISCONNECTED → start() → CONNECTING
    - connect 이벤트 → AUTHENTICATING (metadata 조회)
    - identify 전송 → IDENTIFIED
    - disconnect 이벤트 → DISCONNECTED

    재연결은 Socket.IO 클라이언트의 기본 정책에 위임.
    connect 이벤트마다 metadata를 새로 조회 (자격 증명 재사용 없음).
    metadata 조회 중 연결이 끊기거나 재연결되면 이전 identify는 폐기.

    Args:
        rest_client: REST 클라이언트 (metadata 조회용)
        ws_url: Socket.IO 서버 URL
        namespace: Socket.IO namespace
        path: Socket.IO 경로
        verify_ssl: TLS 인증서 검증 여부 (기본 False)
        on_state_change: 상태 변경 콜백
        socket_factory: AsyncClient 생성 함수 (테스트용 주입)
    """

    USER_AGENT = EmpireEndpoints.WS_USER_AGENT
    TRANSPORTS = ["websocket"]

    def __init__(
        self,
        rest_client: Any,  # IEmpireRestClient
        ws_url: str = EmpireEndpoints.WS_URL,
        namespace: str = EmpireEndpoints.WS_NAMESPACE,
        path: str = EmpireEndpoints.WS_PATH,
        verify_ssl: bool = Defaults.VERIFY_SSL,
        on_state_change: StateChangeCallback | None = None,
        socket_factory: SocketFactory | None = None,
    ):
        self.rest_client = rest_client
        self.ws_url = ws_url
        self.namespace = namespace
        self.path = path
        self.verify_ssl = verify_ssl
        self.on_state_change = on_state_change
        self._socket_factory = socket_factory or self._default_socket_factory

        self._state = SessionState.DISCONNECTED
        self._sio: socketio.AsyncClient | None = None
        self._connected = False

        # connect/disconnect마다 증가, 진행 중인 identify의 유효성 판단용
        self._generation = 0

        self._listeners: dict[str, list[EventHandler]] = defaultdict(list)

    @property
    def state(self) -> SessionState:
        """현재 세션 상태"""
        return self._state

    @property
    def connected(self) -> bool:
        """전송 계층 연결 여부"""
        return self._connected

    @property
    def socket(self) -> SocketView:
        """구독 전용 소켓 뷰

        Raises:
            SocketUnavailableError: start() 호출 전 (소켓 미생성)
        """
        if self._sio is None:
            raise SocketUnavailableError()
        return SocketView(self)

    def _default_socket_factory(self) -> socketio.AsyncClient:
        """기본 AsyncClient 생성 (자동 재연결 활성화)"""
        return socketio.AsyncClient(
            reconnection=True,
            ssl_verify=self.verify_ssl,
            logger=False,
            engineio_logger=False,
        )

    def _create_socket(self) -> socketio.AsyncClient:
        """소켓 생성 및 내부 핸들러 등록"""
        sio = self._socket_factory()
        sio.on(SocketEvents.CONNECT, self._on_connect, namespace=self.namespace)
        sio.on(SocketEvents.DISCONNECT, self._on_disconnect, namespace=self.namespace)
        sio.on(SocketEvents.INIT, self._on_init, namespace=self.namespace)

        if not self.verify_ssl:
            logger.warning(
                "TLS 인증서 검증 비활성화 상태로 연결",
                extra={"url": self.ws_url},
            )
        return sio

    async def start(self) -> None:
        """Socket.IO 연결 시작

        최초 연결 실패는 그대로 전파 (이후 끊김은 자동 재연결).
        """
        if self._sio is None:
            self._sio = self._create_socket()

        await self._set_state(SessionState.CONNECTING)
        try:
            await self._sio.connect(
                self.ws_url,
                headers={"User-Agent": self.USER_AGENT},
                transports=self.TRANSPORTS,
                namespaces=[self.namespace],
                socketio_path=self.path,
            )
        except Exception as e:
            logger.error(
                "WebSocket 연결 실패",
                extra={"url": self.ws_url, "error": str(e)},
            )
            await self._set_state(SessionState.DISCONNECTED)
            raise

    async def wait(self) -> None:
        """연결이 종료될 때까지 대기"""
        if self._sio is None:
            raise SocketUnavailableError()
        await self._sio.wait()

    async def stop(self) -> None:
        """Socket.IO 연결 종료 (소켓 객체는 유지)"""
        if self._sio is not None:
            await self._sio.disconnect()
        self._connected = False
        self._generation += 1
        await self._set_state(SessionState.DISCONNECTED)
        logger.info("WebSocket 연결 종료")

    # -------------------------------------------------------------------------
    # 내부 이벤트 핸들러
    # -------------------------------------------------------------------------

    async def _on_connect(self) -> None:
        """connect: metadata 조회 → identify 전송"""
        self._connected = True
        self._generation += 1
        generation = self._generation

        logger.info("Connected to websocket", extra={"url": self.ws_url})
        await self._set_state(SessionState.AUTHENTICATING)

        identified = await self._identify(generation)
        if identified:
            await self._set_state(SessionState.IDENTIFIED)

        await self._dispatch(SocketEvents.CONNECT)

    async def _identify(self, generation: int) -> bool:
        """metadata 조회 후 identify 전송

        Returns:
            identify 전송 여부
        """
        try:
            metadata = await self.rest_client.get_metadata()
        except Exception as e:
            # 다음 connect 이벤트에서 다시 시도
            logger.error(
                "metadata 조회 실패, identify 생략",
                extra={"error": str(e)},
            )
            return False

        # 조회 중 끊기거나 재연결된 경우 이전 자격 증명 폐기
        if generation != self._generation or self._sio is None:
            logger.warning(
                "연결이 바뀌어 identify 폐기",
                extra={"generation": generation, "current": self._generation},
            )
            return False

        payload = build_identify_payload(metadata)
        await self._sio.emit(
            SocketEvents.IDENTIFY,
            payload,
            namespace=self.namespace,
        )
        logger.debug("identify 전송", extra={"uid": payload["uid"]})
        return True

    async def _on_disconnect(self, *args: Any) -> None:
        """disconnect: 진행 중인 identify 무효화"""
        self._connected = False
        self._generation += 1
        logger.warning("WebSocket 연결 끊김", extra={"reason": args[0] if args else None})
        await self._set_state(SessionState.DISCONNECTED)
        await self._dispatch(SocketEvents.DISCONNECT, *args)

    async def _on_init(self, data: Any = None) -> None:
        """init: 서버의 인증 결과 (관찰만 함)"""
        try:
            event = InitEvent.from_payload(data)
        except InvalidEventPayload as e:
            logger.warning("init 이벤트 형식 오류", extra={"error": str(e)})
        else:
            if event.authenticated:
                logger.info(f"Successfully authenticated as {event.name}")

        await self._dispatch(SocketEvents.INIT, data)

    # -------------------------------------------------------------------------
    # 구독자 관리
    # -------------------------------------------------------------------------

    def _add_listener(self, event: str, handler: EventHandler) -> None:
        """구독자 등록 (이벤트별 디스패처는 최초 1회만 소켓에 등록)"""
        if self._sio is None:
            raise SocketUnavailableError()

        if event not in INTERNAL_EVENTS and event not in self._listeners:
            async def dispatcher(*args: Any) -> None:
                await self._dispatch(event, *args)

            self._sio.on(event, dispatcher, namespace=self.namespace)

        self._listeners[event].append(handler)

    async def _dispatch(self, event: str, *args: Any) -> None:
        """구독자 호출 (한 구독자의 에러가 나머지를 막지 않음)"""
        for handler in list(self._listeners.get(event, ())):
            try:
                result = handler(*args)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(
                    "이벤트 핸들러 에러",
                    extra={"event": event, "error": str(e)},
                )

    async def _set_state(self, new_state: SessionState) -> None:
        """상태 변경 및 콜백 호출"""
        old_state = self._state
        self._state = new_state

        if old_state != new_state:
            logger.info(
                "Session 상태 변경",
                extra={"old_state": old_state.value, "new_state": new_state.value},
            )

            if self.on_state_change is not None:
                try:
                    await self.on_state_change(new_state)
                except Exception as e:
                    logger.error(
                        "상태 변경 콜백 에러",
                        extra={"error": str(e)},
                    )

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "EmpireWsClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()
