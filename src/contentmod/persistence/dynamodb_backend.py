"""DynamoDB backends for state history rows and workflow definitions."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError

from contentmod.core.exceptions import StateStoreError, WorkflowNotFoundError
from contentmod.models.record import StateRecord, TrackedEntityKey
from contentmod.models.workflow import WorkflowDefinition

logger = logging.getLogger(__name__)

STATE_TABLE = "contentmod-moderation-state"
WORKFLOW_TABLE = "contentmod-workflows"

COUNTER_PK = "COUNTER"
COUNTER_SK = "SEQUENCE"


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        elif isinstance(v, list):
            out[k] = [_decode_decimals(i) if isinstance(i, dict) else i for i in v]
        else:
            out[k] = v
    return out


def workflow_items(workflow: WorkflowDefinition) -> list[dict[str, Any]]:
    """Definition item plus one binding item per moderated bundle."""
    items: list[dict[str, Any]] = [{
        "PK": f"WORKFLOW#{workflow.id}",
        "SK": "DEFINITION",
        "definition": json.loads(workflow.model_dump_json()),
    }]
    for entity_type_id, bundles in workflow.bundles.items():
        for bundle in bundles:
            items.append({
                "PK": f"BUNDLE#{entity_type_id}#{bundle}",
                "SK": "WORKFLOW",
                "workflowId": workflow.id,
            })
    return items


def _resource(region: str, endpoint_url: str | None):
    kwargs: dict = {"region_name": region}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.resource("dynamodb", **kwargs)


class DynamoDBStateBackend:
    """Production IStateBackend backed by a single DynamoDB table.

    Rows live under ``PK=STATE#{entity_type}#{entity_id}#{workflow}`` with
    ``SK=SEQ#{sequence}``; a counter item in the same table hands out
    sequence numbers with an atomic ``ADD``.
    """

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._ddb = _resource(region, endpoint_url)
        self._table = self._ddb.Table(f"{STATE_TABLE}{table_suffix}")

    @staticmethod
    def _pk(partition: str) -> str:
        return f"STATE#{partition}"

    @staticmethod
    def _to_item(record: StateRecord) -> dict[str, Any]:
        item: dict[str, Any] = {
            "PK": DynamoDBStateBackend._pk(record.key.partition),
            "SK": f"SEQ#{record.sequence:012d}",
            "entityTypeId": record.key.entity_type_id,
            "entityId": record.key.entity_id,
            "revisionId": record.key.revision_id,
            "workflowId": record.key.workflow_id,
            "stateId": record.state_id,
            "translations": dict(record.translations),
            "sequence": record.sequence,
        }
        if record.language_code is not None:
            item["languageCode"] = record.language_code
        return item

    @staticmethod
    def _from_item(item: dict[str, Any]) -> StateRecord:
        item = _decode_decimals(item)
        return StateRecord(
            key=TrackedEntityKey(
                entity_type_id=item["entityTypeId"],
                entity_id=item["entityId"],
                revision_id=item["revisionId"],
                workflow_id=item["workflowId"],
            ),
            state_id=item["stateId"],
            language_code=item.get("languageCode"),
            translations=item.get("translations", {}),
            sequence=item["sequence"],
        )

    def query_records(self, entity_type_id: str, entity_id: str, workflow_id: str) -> list[StateRecord]:
        pk = self._pk(f"{entity_type_id}#{entity_id}#{workflow_id}")
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": "PK = :pk",
            "ExpressionAttributeValues": {":pk": pk},
        }
        records: list[StateRecord] = []
        try:
            while True:
                resp = self._table.query(**kwargs)
                records.extend(self._from_item(item) for item in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StateStoreError(f"DynamoDB query failed for {pk!r}: {exc}") from exc
        logger.debug("Loaded %d state rows for %s", len(records), pk)
        return records

    def next_sequence(self) -> int:
        try:
            resp = self._table.update_item(
                Key={"PK": COUNTER_PK, "SK": COUNTER_SK},
                UpdateExpression="ADD #v :one",
                ExpressionAttributeNames={"#v": "value"},
                ExpressionAttributeValues={":one": 1},
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as exc:
            raise StateStoreError(f"DynamoDB sequence allocation failed: {exc}") from exc
        return int(resp["Attributes"]["value"])

    def save_records(self, records: list[StateRecord]) -> None:
        if not records:
            return
        try:
            with self._table.batch_writer() as batch:
                for record in records:
                    batch.put_item(Item=self._to_item(record))
        except ClientError as exc:
            raise StateStoreError(f"DynamoDB write of {len(records)} state rows failed: {exc}") from exc


class DynamoDBWorkflowRepository:
    """Production IWorkflowRepository backed by DynamoDB + optional Redis cache."""

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        self._cache_ttl = cache_ttl or self.CACHE_TTL
        self._ddb = _resource(region, endpoint_url)
        self._table = self._ddb.Table(f"{WORKFLOW_TABLE}{table_suffix}")

    def _get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table.get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise StateStoreError(f"DynamoDB get failed for {pk!r}/{sk!r}: {exc}") from exc
        item = resp.get("Item")
        return _decode_decimals(item) if item else None

    def get(self, workflow_id: str) -> WorkflowDefinition:
        cache_key = f"workflow:{workflow_id}"

        # Check cache first
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return WorkflowDefinition.model_validate_json(cached)

        item = self._get_item(f"WORKFLOW#{workflow_id}", "DEFINITION")
        if item is None:
            raise WorkflowNotFoundError(workflow_id)
        workflow = WorkflowDefinition.model_validate(item["definition"])

        # Write to cache
        if self._cache is not None:
            self._cache.setex(cache_key, self._cache_ttl, workflow.model_dump_json())

        return workflow

    def find_for_bundle(self, entity_type_id: str, bundle: str) -> WorkflowDefinition | None:
        item = self._get_item(f"BUNDLE#{entity_type_id}#{bundle}", "WORKFLOW")
        if item is None:
            return None
        return self.get(item["workflowId"])

    def put(self, workflow: WorkflowDefinition) -> None:
        """Store a workflow and its bundle bindings, evicting any cached copy."""
        try:
            with self._table.batch_writer() as batch:
                for item in workflow_items(workflow):
                    batch.put_item(Item=item)
        except ClientError as exc:
            raise StateStoreError(f"DynamoDB write failed for workflow {workflow.id!r}: {exc}") from exc
        if self._cache is not None:
            self._cache.delete(f"workflow:{workflow.id}")
        logger.info("Stored workflow %s", workflow.id)
