from app.models.companies import Company
from app.models.clay_webhooks import ClayWebhook
from app.models.company_sends import CompanySend
from app.models.clay_people import ClayPerson
from app.models.clay_enrichment_logs import ClayEnrichmentLog
