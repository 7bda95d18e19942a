import logging

import httpx

from app.mappers.line_messages import build_new_booking_message
from app.schemas.line import BookingNotificationData, LineMessage

logger = logging.getLogger(__name__)

API_URL = "https://api.line.me/v2/bot/message"
PUSH_URL = f"{API_URL}/push"
MULTICAST_URL = f"{API_URL}/multicast"

MULTICAST_BATCH_SIZE = 500


class LineService:
    """LINE Messaging API push/multicast.

    Delivery is best effort: every method returns False on failure
    instead of raising, so a notification never breaks the caller.
    """

    def __init__(self, client: httpx.AsyncClient, channel_access_token: str):
        self._client = client
        self._token = channel_access_token
        if not channel_access_token:
            logger.warning("LINE: channel access token not configured")

    @property
    def configured(self) -> bool:
        return bool(self._token)

    async def _post(self, url: str, payload: dict) -> bool:
        try:
            resp = await self._client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self._token}"},
            )
        except httpx.HTTPError as exc:
            logger.error("LINE request to %s failed: %s", url, exc)
            return False

        if resp.status_code >= 400:
            logger.error("LINE error %d: %s", resp.status_code, resp.text)
            return False
        return True

    async def push_message(self, line_user_id: str, messages: list[LineMessage]) -> bool:
        if not self._token:
            return False
        return await self._post(
            PUSH_URL,
            {"to": line_user_id, "messages": [m.to_api() for m in messages]},
        )

    async def multicast(self, line_user_ids: list[str], messages: list[LineMessage]) -> bool:
        if not self._token or not line_user_ids:
            return False

        payload_messages = [m.to_api() for m in messages]
        all_success = True
        for i in range(0, len(line_user_ids), MULTICAST_BATCH_SIZE):
            batch = line_user_ids[i:i + MULTICAST_BATCH_SIZE]
            ok = await self._post(MULTICAST_URL, {"to": batch, "messages": payload_messages})
            if not ok:
                all_success = False
        return all_success

    async def send_new_booking_to_admin(
        self, line_user_ids: list[str], data: BookingNotificationData,
    ) -> bool:
        if not line_user_ids:
            return True

        message = build_new_booking_message(data)
        # One push per admin
        all_success = True
        for user_id in line_user_ids:
            if not await self.push_message(user_id, [message]):
                all_success = False

        logger.info(
            "New booking %s notified to %d admins (ok=%s)",
            data.booking_number, len(line_user_ids), all_success,
        )
        return all_success
