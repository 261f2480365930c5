"""Top picks (screening) endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ..config import TOP_PICKS_PATH
from ..io.rest import ResponseAdapter, RestEndpointSpec
from ..models import PicksResponse, StockPick


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    q: dict[str, Any] = {"limit": int(params["limit"])}
    if params.get("category"):
        q["category"] = params["category"]
    return q


SPEC = RestEndpointSpec(
    id="top_picks",
    method="GET",
    build_path=lambda _params: TOP_PICKS_PATH,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Missing ``top_picks`` means no picks, not an error."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[StockPick]:
        result = PicksResponse.model_validate(response)
        return sorted(result.top_picks or [], key=lambda p: p.rank)
