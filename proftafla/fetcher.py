import json
import time
from typing import Any, Optional

import httpx
import structlog

from .errors import FetchError
from .models import DivisionResult
from .parser import parse_departments

logger = structlog.get_logger(__name__)

DEFAULT_URL = (
    "https://ugla.hi.is/Proftafla/View/ajax.php"
    "?sid=2027&a=getProfSvids&proftaflaID=37&svidID={division_id}&notaVinnuToflu=0"
)


class FetchResult:
    def __init__(
        self,
        url: str,
        status_code: int,
        content: bytes = b'',
        fetch_time: float = 0.0,
        encoding: str = None
    ):
        """Initialize a FetchResult with HTTP response data and metadata."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.fetch_time = fetch_time
        self.encoding = encoding

    @property
    def success(self) -> bool:
        """Exact 200 only."""
        return self.status_code == 200

    @property
    def text(self) -> str:
        if not self.content:
            return ""
        try:
            return self.content.decode(self.encoding or 'utf-8')
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    def json(self) -> Any:
        return json.loads(self.text)

    @property
    def size(self) -> int:
        return len(self.content)


class ScheduleFetcher:
    """Fetches a division's exam listing and parses it.

    Transport errors from httpx are logged and re-raised, a status other than
    200 raises FetchError and a body that is not JSON raises
    json.JSONDecodeError. Nothing is retried.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_URL,
        timeout: float = 30.0,
        user_agent: str = 'Proftafla/1.0',
        html_field: str = 'html',
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url_template = url_template
        self.timeout = timeout
        self.user_agent = user_agent
        self.html_field = html_field

        headers = {
            'User-Agent': self.user_agent,
            'Accept': 'application/json, text/javascript, */*; q=0.01',
            'X-Requested-With': 'XMLHttpRequest',
        }
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers=headers,
            transport=transport,
        )

    def build_url(self, division_id: int) -> str:
        return self.url_template.format(division_id=division_id)

    async def fetch(self, url: str) -> FetchResult:
        """GET a URL and return a FetchResult, transport errors propagate."""
        start_time = time.time()

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning("upstream_request_failed",
                           url=url,
                           error=str(e))
            raise

        return FetchResult(
            url=url,
            status_code=response.status_code,
            content=response.content,
            fetch_time=time.time() - start_time,
            encoding=response.encoding,
        )

    async def fetch_and_parse(self, division_id: int, heading: str) -> DivisionResult:
        url = self.build_url(division_id)
        result = await self.fetch(url)

        if not result.success:
            logger.warning("upstream_bad_status",
                           url=url,
                           status_code=result.status_code)
            raise FetchError(url, result.status_code)

        data = result.json()
        fragment = data.get(self.html_field) if isinstance(data, dict) else None

        if not fragment:
            logger.warning("upstream_html_missing",
                           url=url,
                           field=self.html_field)

        departments = parse_departments(fragment or '')

        logger.info("division_fetched",
                    division_id=division_id,
                    departments=len(departments),
                    size=result.size,
                    fetch_time=round(result.fetch_time, 3))

        return DivisionResult(heading=heading, departments=departments)

    async def close(self):
        await self._client.aclose()
