"""Create DynamoDB tables and seed workflow definitions.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import boto3

from contentmod.persistence.dynamodb_backend import STATE_TABLE, WORKFLOW_TABLE, workflow_items
from contentmod.persistence.seed_loader import load_workflows

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": STATE_TABLE},
    {"name": WORKFLOW_TABLE},
]

DEFAULT_SEED = Path(__file__).resolve().parent.parent / "config" / "workflows_seed.json"


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create both DynamoDB tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_workflows(ddb: Any, suffix: str = "", seed_path: Path = DEFAULT_SEED) -> int:
    """Load the workflow seed file into the workflows table."""
    workflows = load_workflows(seed_path)
    tbl = ddb.Table(f"{WORKFLOW_TABLE}{suffix}")
    with tbl.batch_writer() as batch:
        for workflow in workflows:
            for item in workflow_items(workflow):
                batch.put_item(Item=item)
    print(f"  Seeded {len(workflows)} workflows")
    return len(workflows)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for contentmod")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--seed-file", default=str(DEFAULT_SEED), help="Workflow seed JSON")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding workflows...")
    seed_workflows(ddb, suffix=args.table_suffix, seed_path=Path(args.seed_file))

    print("Done!")


if __name__ == "__main__":
    main()
