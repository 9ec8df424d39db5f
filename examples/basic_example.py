#!/usr/bin/env python
"""Basic protoforge example.

This example demonstrates the four construction mechanisms:
- Keyed factory: pick a notification channel by key
- Family factory: get a consistent set of themed widgets
- Prototype registry: clone pre-built document templates
- Builder and director: assemble an HTTP request step by step
"""

from protoforge import KeyedFactory, PrototypeRegistry
from protoforge.builtin_products import (
    HttpRequestBuilder,
    JsonPostDirector,
    Report,
    Resume,
    notification_factory,
    theme_factory,
)


def main():
    """Run the example."""
    # Keyed factory on the shared instance
    channels = notification_factory(KeyedFactory.get_instance())
    for key in ("email", "sms"):
        receipt = channels.create(key, recipient="ops").perform("Nightly build finished")
        print(f"{key}: {receipt}")

    # Family factory
    family = theme_factory().create_family("dark")
    print(f"{family.family} theme: {[product.render() for product in family.values()]}")

    # Prototype registry
    documents = PrototypeRegistry.get_instance()
    documents.register("report", Report(title="Monthly Report", author="Finance Team"))
    documents.register("resume", Resume(name="John Doe", skills=["TS", "Node"]))
    resume = documents.create("resume")
    resume.skills.append("Python")
    print(resume.describe())
    print(documents.create("resume").describe())

    # Builder and director
    request = (
        HttpRequestBuilder()
        .method("POST")
        .url("https://api.example.com/data")
        .header("Content-Type", "application/json")
        .body({"name": "Uzair"})
        .build()
    )
    print(request.to_dict())
    print(JsonPostDirector().construct(HttpRequestBuilder(), url="https://api.example.com/items", body=[1, 2]))


if __name__ == "__main__":
    main()
