"""Fixed initial client set loaded into an empty (or reset) database."""
from typing import List

from .schema import Client, Lane

# (id, name, description, status, priority)
SEED_ROWS = [
    (1, "Stark, White and Abbott", "Cloned Optimal Architecture", "in-progress", 1),
    (2, "Wiza LLC", "Exclusive Bandwidth-Monitored Implementation", "complete", 1),
    (3, "Nolan LLC", "Vision-Oriented 4Thgeneration Graphicaluserinterface", "backlog", 1),
    (4, "Thompson PLC", "Streamlined Regional Knowledgeuser", "in-progress", 2),
    (5, "Walker-Williamson", "Team-Oriented 6Thgeneration Matrix", "in-progress", 3),
    (6, "Boehm and Sons", "Automated Systematic Paradigm", "backlog", 2),
    (7, "Runolfsson, Hegmann and Block", "Integrated Transitional Strategy", "backlog", 3),
    (8, "Schumm-Labadie", "Operative Heuristic Challenge", "backlog", 4),
    (9, "Kohler Group", "Re-Contextualized Multi-Tasking Attitude", "backlog", 5),
    (10, "Romaguera Inc", "Managed Foreground Toolset", "backlog", 6),
    (11, "Reilly-King", "Future-Proofed Interactive Toolset", "complete", 2),
    (12, "Emard, Champlin and Runolfsdottir", "Devolved Needs-Based Capability", "backlog", 7),
    (13, "Fritsch, Cronin and Wolff", "Open-Source 3Rdgeneration Website", "complete", 3),
    (14, "Borer LLC", "Profit-Focused Incremental Orchestration", "backlog", 8),
    (15, "Emmerich-Ankunding", "User-Centric Stable Extranet", "in-progress", 4),
    (16, "Willms-Abbott", "Progressive Bandwidth-Monitored Access", "in-progress", 5),
    (17, "Brekke PLC", "Intuitive User-Facing Customerloyalty", "complete", 4),
    (18, "Bins, Toy and Klocko", "Integrated Assymetric Software", "backlog", 9),
    (19, "Hodkiewicz-Hayes", "Programmable Systematic Securedline", "backlog", 10),
    (20, "Murphy, Lang and Ferry", "Organized Explicit Access", "backlog", 11),
]


def seed_clients() -> List[Client]:
    """Return fresh Client objects for the seed data."""
    return [
        Client(id=cid, name=name, description=desc, status=Lane(status), priority=prio)
        for cid, name, desc, status, prio in SEED_ROWS
    ]
