"""Example queries bundled with the analyzer."""

from __future__ import annotations

from typing import Dict, List

EXAMPLES: Dict[str, str] = {
    "simple": """SELECT u.name, o.total
FROM users u
JOIN orders o ON u.id = o.user_id;""",
    "complex": """SELECT
    u.id,
    u.name,
    u.email,
    o.id as order_id,
    o.total,
    p.sku,
    p.name as product_name,
    cat.name as category,
    COUNT(oi.id) as item_count,
    SUM(oi.quantity * oi.price) as calculated_total
FROM users u
INNER JOIN orders o ON u.id = o.user_id
LEFT JOIN order_items oi ON o.id = oi.order_id
LEFT JOIN products p ON oi.product_id = p.id
RIGHT JOIN categories cat ON p.category_id = cat.id
WHERE o.created_at >= '2024-01-01'
    AND u.active = 1
    AND p.discontinued = 0
GROUP BY u.id, u.name, u.email, o.id, o.total, p.sku, p.name, cat.name
HAVING COUNT(oi.id) > 0
ORDER BY o.total DESC;""",
    "subquery": """SELECT
    main.user_id,
    main.total_spent,
    recent.recent_orders
FROM (
    SELECT
        u.id as user_id,
        SUM(o.total) as total_spent
    FROM users u
    JOIN orders o ON u.id = o.user_id
    GROUP BY u.id
) main
LEFT JOIN (
    SELECT
        user_id,
        COUNT(*) as recent_orders
    FROM orders
    WHERE created_at >= DATE('now', '-30 days')
    GROUP BY user_id
) recent ON main.user_id = recent.user_id;""",
}


def example_names() -> List[str]:
    """Return the names of the bundled examples."""

    return sorted(EXAMPLES)


def get_example(name: str) -> str:
    """Return an example query, falling back to the simple one."""

    return EXAMPLES.get(name.strip().lower(), EXAMPLES["simple"])
