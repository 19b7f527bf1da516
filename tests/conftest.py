"""Pytest configuration and shared fixtures."""

import copy
import logging

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep user environment variables out of config resolution."""
    for name in (
        "CATALOGSNAP_PROJECT_DIR",
        "CATALOGSNAP_METADATA_PATH",
        "CATALOGSNAP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI runs so they don't outlive the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def foreign_key_doc():
    """Foreign key from orders.customer_id to customers.id."""
    return {
        "constraint": {"name": "orders_customer_id_fkey", "oid": 16402},
        "foreign_table": {"schema": "public", "name": "customers"},
        "columns": ["customer_id"],
        "foreign_columns": ["id"],
    }


@pytest.fixture
def table_info_doc(foreign_key_doc):
    """Introspected structure of public.orders."""
    return {
        "oid": 16390,
        "columns": [
            {"name": "id", "position": 1, "type": "int4", "is_nullable": False},
            {
                "name": "customer_id",
                "position": 2,
                "type": "int4",
                "is_nullable": False,
                "description": "Customer placing the order",
            },
            {"name": "placed_at", "position": 3, "type": "timestamptz", "is_nullable": True},
        ],
        "primary_key": {
            "constraint": {"name": "orders_pkey", "oid": 16395},
            "columns": ["id"],
        },
        "unique_constraints": [{"name": "orders_placed_at_key", "oid": 16397}],
        "foreign_keys": [foreign_key_doc],
        "view_info": None,
        "description": "Customer orders",
    }


@pytest.fixture
def table_doc(table_info_doc):
    """Tracked table public.orders with introspection info."""
    return {
        "name": {"schema": "public", "name": "orders"},
        "is_system_defined": False,
        "is_enum": False,
        "configuration": {
            "custom_root_fields": {"select": "all_orders"},
            "custom_column_names": {"placed_at": "placedAt"},
        },
        "info": table_info_doc,
    }


@pytest.fixture
def raw_function_doc():
    """Introspected signature of public.search_orders(text)."""
    return {
        "has_variadic": False,
        "function_type": "STABLE",
        "return_type_schema": "public",
        "return_type_name": "orders",
        "return_type_type": "c",
        "returns_set": True,
        "input_arg_types": [{"schema": "pg_catalog", "name": "text", "type": "b"}],
        "input_arg_names": ["search"],
        "default_args": 0,
        "returns_table": True,
        "description": None,
    }


@pytest.fixture
def catalog_doc(table_doc, raw_function_doc):
    """A complete catalog document touching every section."""
    customers = {
        "name": {"schema": "public", "name": "customers"},
        "is_system_defined": False,
        "is_enum": False,
        "configuration": {},
    }
    return {
        "tables": [copy.deepcopy(table_doc), customers],
        "relations": [
            {
                "table": {"schema": "public", "name": "orders"},
                "rel_name": "customer",
                "rel_type": "object",
                "def": {"foreign_key_constraint_on": "customer_id"},
                "comment": None,
            }
        ],
        "permissions": [
            {
                "table": {"schema": "public", "name": "orders"},
                "role": "user",
                "perm_type": "select",
                "def": {"columns": ["id", "placed_at"], "filter": {"customer_id": {"_eq": "X-Hasura-User-Id"}}},
                "comment": "own orders only",
            }
        ],
        "event_triggers": [
            {
                "table": {"schema": "public", "name": "orders"},
                "name": "order_placed",
                "def": {"insert": {"columns": "*"}},
            }
        ],
        "remote_schemas": [
            {"name": "payments", "definition": {"url": "https://payments.example.com/graphql"}}
        ],
        "functions": [
            {
                "function": {"schema": "public", "name": "search_orders"},
                "is_system_defined": False,
                "configuration": {},
                "info": [copy.deepcopy(raw_function_doc)],
            }
        ],
        "allowlist_collections": [
            {"queries": [{"name": "recent_orders", "query": "query { orders { id } }"}]}
        ],
        "computed_fields": [
            {
                "computed_field": {
                    "table": {"schema": "public", "name": "customers"},
                    "name": "order_count",
                    "definition": {
                        "function": {"schema": "public", "name": "customer_order_count"},
                        "table_argument": None,
                    },
                    "comment": None,
                },
                "function_info": [copy.deepcopy(raw_function_doc)],
            }
        ],
        "custom_types": {
            "custom_types": {
                "objects": [{"name": "RefundResult", "fields": [{"name": "ok", "type": "Boolean!"}]}],
                "input_objects": [{"name": "RefundInput", "fields": [{"name": "order_id", "type": "Int!"}]}],
            },
            "pg_scalars": ["int4", "text", "timestamptz"],
        },
        "actions": [
            {
                "name": "refund_order",
                "definition": {"handler": "https://payments.example.com/refund", "kind": "synchronous"},
                "comment": None,
                "permissions": [{"role": "support"}],
            }
        ],
    }
