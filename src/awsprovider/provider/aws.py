import asyncio
import time
from enum import Enum
from typing import Any, Callable
from urllib.parse import quote

import boto3
from botocore.client import BaseClient
from botocore.exceptions import ClientError

from awsprovider.config import DEFAULT_REGION
from awsprovider.errors import NotInitializedError
from awsprovider.logging import AdapterLogger, null_logger
from awsprovider.metrics import OperationMetrics
from awsprovider.models import (
    DATA_UNAVAILABLE,
    CostQuery,
    CostQueryFailure,
    Credentials,
)

NO_COST_DATA_MESSAGE = "No cost data available for the specified date range."
COST_DATA_UNAVAILABLE_MESSAGE = "Cost data is not available for the specified time period."
COST_FETCH_FAILED_MESSAGE = "Cost data could not be fetched."


class ProviderState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


def _error_code(exc: "BaseException") -> "str":
    if isinstance(exc, ClientError):
        return str(exc.response.get("Error", {}).get("Code", ""))
    return ""


class AWSProvider:
    """
    AWSProvider implements the CloudProvider protocol on top of
    boto3's S3 and Cost Explorer clients.

    Each instance owns its own session and clients, so adapters
    with different credentials can live side by side. boto3
    calls are blocking and run on a worker thread; the clients
    are thread-safe, so concurrent calls need no locking.
    """

    def __init__(
        self,
        region: "str" = DEFAULT_REGION,
        endpoint_url: "str" = "",
        logger: "AdapterLogger | None" = None,
        metrics: "OperationMetrics | None" = None,
        session_factory: "Callable[..., boto3.session.Session]" = boto3.session.Session,
    ) -> "None":
        self._region = region
        self._endpoint_url = endpoint_url.rstrip("/")
        self._logger: "AdapterLogger" = logger if logger is not None else null_logger()
        self._metrics = metrics
        self._session_factory = session_factory
        self._state: "ProviderState" = ProviderState.UNINITIALIZED
        self._s3: "BaseClient | None" = None
        self._ce: "BaseClient | None" = None

    @property
    def name(self) -> "str":
        return "aws"

    @property
    def state(self) -> "ProviderState":
        return self._state

    def initialize(self, credentials: "Credentials") -> "None":
        """
        builds the S3 and Cost Explorer clients from the given
        credentials. Failures are logged and re-raised as-is;
        the provider stays uninitialized.
        """
        try:
            session = self._session_factory(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                region_name=self._region,
            )
            s3 = session.client("s3", endpoint_url=self._endpoint_url or None)
            ce = session.client("ce", endpoint_url=self._endpoint_url or None)
        except Exception as exc:
            self._logger.error("aws_connect_error", error=str(exc))
            raise

        self._s3 = s3
        self._ce = ce
        self._state = ProviderState.READY
        self._logger.info("aws_connected", region=self._region)

    async def close(self) -> "None":
        """
        closes both clients and returns the provider to the
        uninitialized state.
        """
        for client in (self._s3, self._ce):
            if client is not None:
                client.close()
        self._s3 = None
        self._ce = None
        self._state = ProviderState.UNINITIALIZED

    def _require_ready(self, operation: "str") -> "None":
        if self._state is not ProviderState.READY:
            raise NotInitializedError(operation)

    def _observe(self, operation: "str", outcome: "str", started: "float") -> "None":
        if self._metrics is not None:
            self._metrics.record(operation, outcome, time.monotonic() - started)

    def object_location(self, bucket: "str", key: "str") -> "str":
        """
        builds the URL an uploaded object is reachable at.
        Custom endpoints use path-style addressing.
        """
        quoted_key = quote(key, safe="/~")
        if self._endpoint_url:
            return f"{self._endpoint_url}/{bucket}/{quoted_key}"
        return f"https://{bucket}.s3.{self._region}.amazonaws.com/{quoted_key}"

    async def upload_object(self, bucket: "str", key: "str", data: "bytes") -> "str":
        """
        uploads data under bucket/key and returns its locator.
        Raises the underlying client error on failure.
        """
        self._require_ready("upload_object")
        started = time.monotonic()
        try:
            await asyncio.to_thread(self._s3.put_object, Bucket=bucket, Key=key, Body=data)
        except Exception as exc:
            self._logger.error("object_upload_error", bucket=bucket, key=key, error=str(exc))
            self._observe("upload_object", "error", started)
            raise

        location = self.object_location(bucket, key)
        self._logger.info("object_uploaded", location=location)
        self._observe("upload_object", "success", started)
        return location

    async def fetch_object(self, bucket: "str", key: "str") -> "str":
        """
        returns the object body decoded as UTF-8 text, or an
        empty string when the object has no body. Raises the
        underlying client error on failure, including NoSuchKey.
        """
        self._require_ready("fetch_object")
        started = time.monotonic()
        try:
            text = await asyncio.to_thread(self._read_object, bucket, key)
        except Exception as exc:
            self._logger.error("object_retrieve_error", bucket=bucket, key=key, error=str(exc))
            self._observe("fetch_object", "error", started)
            raise

        self._logger.info("object_retrieved", bucket=bucket, key=key)
        self._observe("fetch_object", "success", started)
        return text

    def _read_object(self, bucket: "str", key: "str") -> "str":
        response = self._s3.get_object(Bucket=bucket, Key=key)
        body = response.get("Body")
        if body is None:
            return ""
        return body.read().decode("utf-8", errors="replace")

    async def delete_object(self, bucket: "str", key: "str") -> "None":
        """
        deletes bucket/key. S3 reports success for missing keys.
        Raises the underlying client error on failure.
        """
        self._require_ready("delete_object")
        started = time.monotonic()
        try:
            await asyncio.to_thread(self._s3.delete_object, Bucket=bucket, Key=key)
        except Exception as exc:
            self._logger.error("object_delete_error", bucket=bucket, key=key, error=str(exc))
            self._observe("delete_object", "error", started)
            raise

        self._logger.info("object_deleted", bucket=bucket, key=key)
        self._observe("delete_object", "success", started)

    async def query_cost(self, query: "CostQuery") -> "dict[str, Any] | CostQueryFailure":
        """
        runs a single get_cost_and_usage call and returns the raw
        response when it has result rows. Empty results and
        failures come back as a CostQueryFailure, never raised.

        Only one page is fetched. The response's NextPageToken is
        left in place; pass it back via CostQuery.next_page_token
        to get the next page.
        """
        self._require_ready("query_cost")
        started = time.monotonic()
        try:
            request = query.to_request()
            response = await asyncio.to_thread(self._ce.get_cost_and_usage, **request)
        except Exception as exc:
            if _error_code(exc) == DATA_UNAVAILABLE:
                self._logger.error("cost_data_unavailable", error=str(exc))
                self._observe("query_cost", "unavailable", started)
                return CostQueryFailure(DATA_UNAVAILABLE, COST_DATA_UNAVAILABLE_MESSAGE)

            self._logger.error("cost_query_error", error=str(exc))
            self._observe("query_cost", "error", started)
            return CostQueryFailure(str(exc), COST_FETCH_FAILED_MESSAGE)

        if not response.get("ResultsByTime"):
            self._logger.error(
                "cost_data_unavailable",
                time_period=request["TimePeriod"],
                granularity=request["Granularity"],
            )
            self._observe("query_cost", "unavailable", started)
            return CostQueryFailure(DATA_UNAVAILABLE, NO_COST_DATA_MESSAGE)

        self._logger.info(
            "cost_data_fetched",
            result_count=len(response["ResultsByTime"]),
            has_next_page=bool(response.get("NextPageToken")),
        )
        self._observe("query_cost", "success", started)
        return response
