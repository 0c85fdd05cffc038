"""Client for the story service that writes the actual narrative.

The service is a plain JSON-over-HTTP API:

    POST /users                    {"email", "password"} -> {"accessToken"}
    POST /sessions                 custom prompt          -> {"id", "story": [{"value"}]}
    POST /sessions/<id>/inputs     {"text"}               -> [{"type", "value"}, ...]

Calls are blocking ``requests`` calls; the async wrappers push them onto the
default executor so the Discord gateway keeps its heartbeat.
"""
import asyncio, logging
from typing import Optional, Tuple

import requests

from discord_dungeon.classes.app_config import AppConfig
from discord_dungeon.exceptions import EngineError

logger = logging.getLogger(__name__)


class NarrativeEngine:
    def __init__(self, base_url: str, email: str = None, password: str = None, timeout: float = 60, http=None):
        self.base_url = base_url.rstrip("/")
        self.email = email
        self.password = password
        self.timeout = timeout
        self.access_token: Optional[str] = None
        self.http = http or requests.Session()

    @classmethod
    def from_config(cls, config: AppConfig):
        return cls(
            base_url=config.get_engine_base_url(),
            email=config.get_engine_email(),
            password=config.get_engine_password(),
            timeout=config.get_engine_timeout(),
        )

    def _post(self, path: str, payload, authenticated: bool = True, retry_auth: bool = True):
        headers = {"Content-Type": "application/json"}
        if authenticated:
            if self.access_token is None:
                self.login()
            headers["x-access-token"] = self.access_token
        url = f"{self.base_url}{path}"
        try:
            response = self.http.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise EngineError(f"Could not reach the narrative engine at {url}: {e}") from e
        if response.status_code == 401 and authenticated and retry_auth:
            logger.warning("Narrative engine token was rejected, logging in again.")
            self.access_token = None
            return self._post(path, payload, authenticated=True, retry_auth=False)
        if response.status_code < 200 or response.status_code > 299:
            logger.debug(f"Narrative engine error body: {response.text}")
            raise EngineError(f"Narrative engine returned HTTP {response.status_code} for {path}")
        try:
            return response.json()
        except ValueError as e:
            raise EngineError(f"Narrative engine sent a non-JSON body for {path}") from e

    def login(self) -> str:
        if not self.email or not self.password:
            raise EngineError("Narrative engine credentials are not configured.")
        logger.info(f"Logging into the narrative engine as {self.email}")
        body = self._post("/users", {"email": self.email, "password": self.password}, authenticated=False)
        token = body.get("accessToken") if isinstance(body, dict) else None
        if not token:
            raise EngineError("Narrative engine login did not return an access token.")
        self.access_token = token
        logger.info("Logged into the narrative engine.")
        return token

    def create_playthrough_sync(self, prompt: str) -> Tuple[str, str]:
        body = self._post(
            "/sessions",
            {
                "storyMode": "custom",
                "characterType": None,
                "name": None,
                "customPrompt": prompt,
                "promptId": None,
            },
        )
        story = body.get("story") if isinstance(body, dict) else None
        if not story:
            raise EngineError("Narrative engine created a playthrough with an empty story.")
        engine_session_id = body.get("id")
        if engine_session_id is None:
            raise EngineError("Narrative engine did not return a playthrough id.")
        if not isinstance(story, list) or not isinstance(story[0], dict):
            raise EngineError(f"Narrative engine sent a malformed story for playthrough {engine_session_id}.")
        first_output = story[0].get("value") or ""
        if not first_output.strip():
            raise EngineError(f"Narrative engine gave playthrough {engine_session_id} no opening text.")
        return str(engine_session_id), first_output

    def submit_turn_sync(self, engine_session_id: str, text: str) -> str:
        body = self._post(f"/sessions/{engine_session_id}/inputs", {"text": text})
        if not isinstance(body, list) or len(body) == 0:
            raise EngineError(f"Narrative engine returned no story for playthrough {engine_session_id}.")
        last = body[-1]
        if not isinstance(last, dict):
            raise EngineError(f"Narrative engine sent a malformed story entry for playthrough {engine_session_id}.")
        # The engine echoes the input back; a story that ends on it produced nothing.
        if last.get("type") == "input":
            raise EngineError(f"Narrative engine ended playthrough {engine_session_id} on our own input.")
        output = last.get("value") or ""
        if not output.strip():
            raise EngineError(f"Narrative engine returned blank text for playthrough {engine_session_id}.")
        return output

    async def create_playthrough(self, prompt: str) -> Tuple[str, str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.create_playthrough_sync(prompt))

    async def submit_turn(self, engine_session_id: str, text: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.submit_turn_sync(engine_session_id, text))
