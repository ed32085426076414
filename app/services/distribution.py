from typing import Any, Dict, List, Sequence, Tuple


def distribute_companies(
    companies: Sequence[Any],
    webhooks: Sequence[Any],
    max_per_webhook: int,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Split companies across webhooks in order.

    Each webhook takes the next contiguous slice of at most ``max_per_webhook``
    companies, so earlier webhooks fill up first. Webhooks left without
    companies are not part of the result.

    Returns the ``{"webhook", "companies"}`` assignments and the number of
    companies that did not fit in any webhook.
    """
    distribution = []
    company_index = 0

    if max_per_webhook > 0:
        for webhook in webhooks:
            if company_index >= len(companies):
                break
            webhook_companies = list(companies[company_index:company_index + max_per_webhook])
            distribution.append({"webhook": webhook, "companies": webhook_companies})
            company_index += len(webhook_companies)

    return distribution, len(companies) - company_index
