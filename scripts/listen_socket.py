#!/usr/bin/env python3
"""Socket.IO 실시간 피드 확인 스크립트

config/secrets.yaml의 API 키로 접속해서 수신 이벤트를 로그로 출력.
"""

import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.csgoempire import CSGOEmpire
from core.logging import setup_logging

# 출력할 트레이딩 이벤트
WATCHED_EVENTS = ["timesync", "new_item", "updated_item", "auction_update", "deleted_item", "trade_status"]

logger = logging.getLogger("listen_socket")


async def main():
    setup_logging("listen_socket")

    async with CSGOEmpire.from_secrets() as empire:
        for event in WATCHED_EVENTS:
            def handler(data=None, _event=event):
                logger.info(f"[{_event}] {str(data)[:200]}")

            empire.socket.on(event, handler)

        auctions = await empire.api.get_active_auctions()
        logger.info(f"Active auctions: {auctions}")

        await empire.wait()


if __name__ == "__main__":
    asyncio.run(main())
