from typing import Any, Protocol

from awsprovider.models import CostQuery, CostQueryFailure, Credentials


class CloudProvider(Protocol):
    """
    CloudProvider stands as the common protocol for cloud
    resource adapters.

    Storage operations signal failure by raising the
    underlying client's error. query_cost never raises for
    query failures; it returns a CostQueryFailure instead.
    Every operation raises NotInitializedError when called
    before initialize().
    """

    @property
    def name(self) -> "str": ...

    def initialize(self, credentials: "Credentials") -> "None": ...

    async def upload_object(self, bucket: "str", key: "str", data: "bytes") -> "str": ...

    async def fetch_object(self, bucket: "str", key: "str") -> "str": ...

    async def delete_object(self, bucket: "str", key: "str") -> "None": ...

    async def query_cost(
        self,
        query: "CostQuery",
    ) -> "dict[str, Any] | CostQueryFailure": ...

    async def close(self) -> "None": ...
