"""Tests for DynamoDB seed script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from contentmod.persistence.dynamodb_backend import DynamoDBWorkflowRepository

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from seed_dynamodb import create_tables, seed_workflows  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_both_tables(self, ddb):
        create_tables(ddb, suffix="-test")
        client = boto3.client("dynamodb", region_name="us-east-1")
        tables = client.list_tables()["TableNames"]
        assert sorted(tables) == ["contentmod-moderation-state-test", "contentmod-workflows-test"]

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        create_tables(ddb, suffix="-test")  # should not raise
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert len(client.list_tables()["TableNames"]) == 2


class TestSeedWorkflows:
    def test_seeds_definition_and_bindings(self, ddb):
        create_tables(ddb, suffix="-test")
        assert seed_workflows(ddb, suffix="-test") == 1
        resp = ddb.Table("contentmod-workflows-test").scan()
        # definition + node/article + node/page
        assert resp["Count"] == 3

    def test_seeded_workflow_is_readable(self, ddb):
        create_tables(ddb, suffix="-test")
        seed_workflows(ddb, suffix="-test")
        repo = DynamoDBWorkflowRepository(table_suffix="-test", region="us-east-1")
        workflow = repo.find_for_bundle("node", "page")
        assert workflow.id == "editorial"
        assert workflow.get_state("published").published is True
