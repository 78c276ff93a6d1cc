"""
Deterministic fixture data for offline mode.

Used when ``KS_USE_FIXTURES=1`` (or ``search.use_fixtures`` in config.json)
so the server can be exercised without reaching any live source. Items are
returned when any query token appears in their title or snippet.
"""

from typing import Any

from models.config import Source
from utils.helpers import query_tokens

__all__ = ["FIXTURES", "get_fixture_items"]

FIXTURES: dict[Source, list[dict[str, Any]]] = {
    Source.DOCUMENTATION: [
        {
            "title": "Agent Workspace Customization",
            "url": "https://docs.servicenow.com/bundle/agent-workspace/page/customization.html",
            "snippet": "Customize the Agent Workspace to improve agent productivity. "
            "Learn about configuration options, custom widgets, and layouts.",
        },
        {
            "title": "Incident Management Process Overview",
            "url": "https://docs.servicenow.com/bundle/itsm/page/incident-management.html",
            "snippet": "Restore normal service operation as quickly as possible. "
            "Covers incident states, assignment rules, and SLAs.",
        },
        {
            "title": "ServiceNow ITSM Best Practices",
            "url": "https://docs.servicenow.com/bundle/itsm/page/best-practices.html",
            "snippet": "Documentation copy of the ITSM best practices guide.",
        },
    ],
    Source.COMMUNITY: [
        {
            "title": "Using Flow Designer for HR Service Delivery",
            "url": "https://www.servicenow.com/community/hrsd-forum/flow-designer-hr/m-p/1001",
            "snippet": "Learn how to automate HR workflows using Flow Designer. Includes "
            "examples for onboarding, time-off requests, and employee transitions.",
        },
        {
            "title": "Change approval policies not triggering",
            "url": "https://www.servicenow.com/community/itsm-forum/change-approval/m-p/1002",
            "snippet": "Community thread on change approval policy conditions and "
            "the best practices for CAB workbench setup.",
        },
    ],
    Source.DEVSITE: [
        {
            "title": "ServiceNow API Authentication Methods",
            "url": "https://developer.servicenow.com/dev.do#!/learn/api-authentication",
            "snippet": "Learn different methods to authenticate with ServiceNow APIs "
            "including Basic Auth, OAuth, and Mid Server. Includes code examples "
            "in JavaScript and Python.",
        },
        {
            "title": "Scripted REST APIs",
            "url": "https://developer.servicenow.com/dev.do#!/learn/scripted-rest",
            "snippet": "Build custom REST endpoints with scripted resources, "
            "request parsing, and response builders.",
        },
    ],
    Source.BLOG: [
        {
            "title": "ServiceNow Tokyo Release Highlights",
            "url": "https://www.servicenow.com/blogs/2022/tokyo-release-highlights.html",
            "snippet": "Overview of key features and improvements in the Tokyo release. "
            "Learn about platform changes, new modules, and deprecated functionality.",
        },
        {
            "title": "Five ITSM practices that scale",
            "url": "https://www.servicenow.com/blogs/2023/itsm-practices-that-scale.html",
            "snippet": "Lessons from large ITSM rollouts: incident triage, problem "
            "trending, and change automation.",
        },
    ],
    Source.GITHUB: [
        {
            "title": "servicenow-sdk-examples",
            "url": "https://github.com/ServiceNow/sdk-examples",
            "snippet": "Sample applications built with the ServiceNow SDK.",
        },
        {
            "title": "pysnow",
            "url": "https://github.com/rbw/pysnow",
            "snippet": "Python library for the ServiceNow REST API.",
        },
    ],
    Source.YOUTUBE: [
        {
            "title": "ServiceNow ITSM Demo | Incident to Resolution",
            "url": "https://www.youtube.com/watch?v=itsm-demo",
            "snippet": "End-to-end walkthrough of incident, problem, and change "
            "management best practices.",
        },
    ],
    Source.NOW_CREATE: [
        {
            "title": "Implementing CMDB in ServiceNow",
            "url": "https://nowcreate.service-now.com/resources/cmdb-implementation",
            "snippet": "Best practices for CMDB implementation including data modeling, "
            "discovery setup, and maintaining data quality.",
        },
        {
            "title": "ITSM Implementation Playbook",
            "url": "https://nowcreate.service-now.com/resources/itsm-playbook",
            "snippet": "Now Create playbook for ITSM: workshops, process design "
            "templates, and best practices for go-live.",
        },
    ],
}


def get_fixture_items(source: Source, query: str) -> list[dict[str, Any]]:
    """Return fixture items for a source that match any query token."""
    tokens = query_tokens(query)
    if not tokens:
        return []
    items = []
    for item in FIXTURES.get(source, []):
        text = f"{item['title']} {item['snippet']}".lower()
        if any(token in text for token in tokens):
            items.append(dict(item))
    return items
