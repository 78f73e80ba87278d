from typing import Annotated

from pydantic import AfterValidator, StringConstraints

from concierge.services.payout_rule_service import ISO_DATE_PATTERN, parse_iso_date

# YYYY-MM-DD that also names a real calendar day
IsoDate = Annotated[str, StringConstraints(pattern=ISO_DATE_PATTERN), AfterValidator(parse_iso_date)]
