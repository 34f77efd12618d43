from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Granularity(str, Enum):
    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"


class Metric(str, Enum):
    BLENDED_COST = "BLENDED_COST"
    UNBLENDED_COST = "UNBLENDED_COST"
    AMORTIZED_COST = "AMORTIZED_COST"
    NET_AMORTIZED_COST = "NET_AMORTIZED_COST"
    NET_UNBLENDED_COST = "NET_UNBLENDED_COST"
    USAGE_QUANTITY = "USAGE_QUANTITY"
    NORMALIZED_USAGE_AMOUNT = "NORMALIZED_USAGE_AMOUNT"


class GroupByType(str, Enum):
    DIMENSION = "DIMENSION"
    TAG = "TAG"
    COST_CATEGORY = "COST_CATEGORY"


class GroupByKey(str, Enum):
    """
    GroupByKey lists the Cost Explorer dimensions that
    cost rows can be partitioned by.
    """

    AZ = "AZ"
    INSTANCE_TYPE = "INSTANCE_TYPE"
    LINKED_ACCOUNT = "LINKED_ACCOUNT"
    OPERATION = "OPERATION"
    PURCHASE_TYPE = "PURCHASE_TYPE"
    SERVICE = "SERVICE"
    USAGE_TYPE = "USAGE_TYPE"
    PLATFORM = "PLATFORM"
    TENANCY = "TENANCY"
    RECORD_TYPE = "RECORD_TYPE"
    LEGAL_ENTITY_NAME = "LEGAL_ENTITY_NAME"
    INVOICING_ENTITY = "INVOICING_ENTITY"
    DEPLOYMENT_OPTION = "DEPLOYMENT_OPTION"
    DATABASE_ENGINE = "DATABASE_ENGINE"
    CACHE_ENGINE = "CACHE_ENGINE"
    INSTANCE_TYPE_FAMILY = "INSTANCE_TYPE_FAMILY"
    REGION = "REGION"
    BILLING_ENTITY = "BILLING_ENTITY"
    RESERVATION_ID = "RESERVATION_ID"
    SAVINGS_PLANS_TYPE = "SAVINGS_PLANS_TYPE"
    SAVINGS_PLAN_ARN = "SAVINGS_PLAN_ARN"
    OPERATING_SYSTEM = "OPERATING_SYSTEM"


@dataclass(frozen=True, slots=True)
class Credentials:
    """
    Credentials holds the access key pair used to build
    the AWS session. The secret never shows up in repr().
    """

    access_key_id: "str"
    secret_access_key: "str" = field(repr=False)


@dataclass(frozen=True, slots=True)
class TimePeriod:
    """
    TimePeriod is a date range in YYYY-MM-DD form. Start is
    inclusive and end is exclusive, as Cost Explorer expects.
    """

    start: "str"
    end: "str"

    def to_request(self) -> "dict[str, str]":
        return {"Start": self.start, "End": self.end}


@dataclass(frozen=True, slots=True)
class GroupBy:
    key: "GroupByKey | str"
    # tag and cost category groupings take free-form keys
    type: "GroupByType" = GroupByType.DIMENSION

    def __post_init__(self) -> "None":
        object.__setattr__(self, "type", GroupByType(self.type))
        if self.type is GroupByType.DIMENSION and self.key in GroupByKey.__members__:
            object.__setattr__(self, "key", GroupByKey(self.key))

    def to_request(self) -> "dict[str, str]":
        key = self.key.value if isinstance(self.key, GroupByKey) else self.key
        return {"Type": self.type.value, "Key": key}


@dataclass(frozen=True, slots=True)
class CostQuery:
    """
    CostQuery describes a single page of a Cost Explorer
    cost-and-usage query.

    extra carries passthrough request fields (Filter,
    BillingViewArn, ...) that are merged into the request as-is.
    """

    time_period: "TimePeriod"
    granularity: "Granularity" = Granularity.DAILY
    metrics: "Sequence[Metric]" = (Metric.UNBLENDED_COST,)
    group_by: "Sequence[GroupBy]" = ()
    next_page_token: "str | None" = None
    extra: "Mapping[str, Any]" = field(default_factory=dict)

    def __post_init__(self) -> "None":
        # callers may pass plain strings for the enum fields
        object.__setattr__(self, "granularity", Granularity(self.granularity))
        object.__setattr__(self, "metrics", tuple(Metric(m) for m in self.metrics))
        object.__setattr__(self, "group_by", tuple(self.group_by))
        if not self.metrics:
            raise ValueError("at least one metric is required")

    def to_request(self) -> "dict[str, Any]":
        """
        renders the query as get_cost_and_usage keyword arguments.
        """
        request: "dict[str, Any]" = dict(self.extra)
        request["TimePeriod"] = self.time_period.to_request()
        request["Granularity"] = self.granularity.value
        request["Metrics"] = [m.value for m in self.metrics]
        if self.group_by:
            request["GroupBy"] = [g.to_request() for g in self.group_by]
        if self.next_page_token:
            request["NextPageToken"] = self.next_page_token
        return request

    @classmethod
    def from_request(cls, request: "Mapping[str, Any]") -> "CostQuery":
        """
        parses a vendor-shaped request mapping. Keys the query
        doesn't model are kept as passthrough fields.
        """
        known = {"TimePeriod", "Granularity", "Metrics", "GroupBy", "NextPageToken"}
        period = request["TimePeriod"]
        group_by = []
        for item in request.get("GroupBy", []):
            key = item["Key"]
            if key in GroupByKey.__members__:
                key = GroupByKey(key)
            group_by.append(GroupBy(key=key, type=GroupByType(item["Type"])))

        return cls(
            time_period=TimePeriod(start=period["Start"], end=period["End"]),
            granularity=Granularity(request.get("Granularity", "DAILY")),
            metrics=tuple(Metric(m) for m in request.get("Metrics", [])),
            group_by=tuple(group_by),
            next_page_token=request.get("NextPageToken"),
            extra={k: v for k, v in request.items() if k not in known},
        )


@dataclass(frozen=True, slots=True)
class CostQueryFailure:
    """
    CostQueryFailure is the normalized failure returned by
    cost queries in place of raising.
    """

    error: "str"
    message: "str"

    def to_dict(self) -> "dict[str, str]":
        return {"error": self.error, "message": self.message}


DATA_UNAVAILABLE = "DataUnavailableException"
