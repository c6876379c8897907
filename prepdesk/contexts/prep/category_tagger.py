"""
Keyword-based category tagging for interview questions.
"""

from enum import Enum


class QuestionCategory(str, Enum):
    DSA = "DSA"
    SYSTEM_DESIGN = "SystemDesign"
    SQL = "SQL"
    BEHAVIORAL = "Behavioral"
    OTHER = "Other"


DSA_KEYWORDS = [
    "array", "string", "tree", "graph", "sort", "search",
    "linked list", "stack", "queue", "heap", "hash",
    "binary", "recursion", "dynamic programming", "dp",
    "algorithm", "leetcode", "reverse", "palindrome",
    "two pointer", "sliding window", "bfs", "dfs",
    "merge", "quick sort", "insertion", "bubble",
]

SYSTEM_DESIGN_KEYWORDS = [
    "design", "scale", "api", "database", "cache",
    "load balancer", "microservice", "architecture",
    "distributed", "sharding", "replication", "cdn",
    "consistency", "availability", "partition",
    "rate limit", "notification", "chat", "feed",
    "url shortener", "twitter", "instagram", "uber",
]

SQL_KEYWORDS = [
    "sql", "query", "join", "index", "table",
    "select", "aggregate", "acid",
    "transaction", "normalization", "primary key",
    "foreign key", "group by", "having", "where",
]

BEHAVIORAL_KEYWORDS = [
    "tell me about", "describe a time", "situation",
    "conflict", "challenge", "mistake", "feedback",
    "team", "leadership", "disagree", "failure",
    "weakness", "strength", "why this company",
    "biggest achievement", "difficult decision",
]

# Most specific first; matching is plain substring containment
CATEGORY_KEYWORDS = [
    (QuestionCategory.SYSTEM_DESIGN, SYSTEM_DESIGN_KEYWORDS),
    (QuestionCategory.SQL, SQL_KEYWORDS),
    (QuestionCategory.BEHAVIORAL, BEHAVIORAL_KEYWORDS),
    (QuestionCategory.DSA, DSA_KEYWORDS),
]


def auto_tag_category(question_text: str) -> QuestionCategory:
    """
    Guess the category of an interview question from its wording.

    Example:
        >>> auto_tag_category("Design a URL shortener").value
        'SystemDesign'
        >>> auto_tag_category("Reverse a linked list").value
        'DSA'
    """
    lower = (question_text or "").lower()

    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return category

    return QuestionCategory.OTHER
