"""Example usage of the diffjson comparison engine."""

import json
from diffjson import DiffEngine, RuleSet, format_result

# Original document (left side)
old_document = """{
  "id": "INV-001",
  "customer": {
    "name": "John Smith",
    "email": "john@example.com"
  },
  "total": 100.0,
  "tags": ["urgent", "export", "paid"],
  "lineItems": [
    {"sku": "WIDGET-001", "quantity": 5},
    {"sku": "GADGET-002", "quantity": 2}
  ],
  "metadata": {
    "traceId": "abc123",
    "updatedAt": "2025-02-02T11:00:00Z"
  }
}"""

# Modified document (right side)
new_document = """{
  "id": "INV-001",
  "customer": {
    "name": "John Smith",
    "email": "j.smith@example.com",
    "phone": "+1 555 0100"
  },
  "total": 100,
  "tags": ["paid", "urgent", "export"],
  "lineItems": [
    {"sku": "GADGET-002", "quantity": 2},
    {"sku": "WIDGET-001", "quantity": 7}
  ],
  "metadata": {
    "traceId": "def456",
    "updatedAt": "2025-02-03T09:15:00Z"
  }
}"""


def main():
    print("=" * 60)
    print("diffjson - Example")
    print("=" * 60)

    # Create engine with default rules
    engine = DiffEngine()
    result = engine.compare(old_document, new_document, "old.json", "new.json")

    print(f"\nHas differences: {result.has_differences}")
    print(f"\nSummary:")
    for diff_type, count in result.counts().items():
        print(f"  {diff_type.readable_text}: {count}")

    print("\n" + "-" * 60)
    print(format_result(result))


def example_with_rules():
    """Example with ignore and unordered rules."""
    print("\n" + "=" * 60)
    print("Example with Rules")
    print("=" * 60)

    rules = RuleSet.from_patterns(
        ignore=["$.metadata.*"],
        unordered=["$.tags", "$.lineItems"],
    )
    engine = DiffEngine(rules)
    result = engine.compare(old_document, new_document, "old.json", "new.json")

    print(format_result(result, symbols=True))


def example_with_nested_differences():
    """Example showing what changed inside paired array items."""
    print("\n" + "=" * 60)
    print("Example with Nested Differences")
    print("=" * 60)

    rules = RuleSet.from_patterns(
        unordered=["$.lineItems"],
        show_nested_differences=True,
    )
    result = DiffEngine(rules).compare(old_document, new_document)

    for entry in result:
        print(f"  - [{entry.diff_type.value}] {entry.path}")
        print(f"    {entry.diff_type.description}")

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
    example_with_rules()
    example_with_nested_differences()
