"""Promotion redemption: command, handler and the running-promotions query."""

from datetime import UTC, date, datetime

from protean import handle
from protean.fields import Date, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.establishment.registration import establishment_ids_in
from catalogue.promotion.promotion import Promotion


@catalogue.command(part_of="Promotion")
class RedeemPromotion:
    promotion_id: Identifier(required=True)
    session_id: String(required=True, max_length=255)
    redeemed_on: Date()  # Optional: defaults to today


@catalogue.command_handler(part_of=Promotion)
class RedeemPromotionHandler:
    @handle(RedeemPromotion)
    def redeem_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = repo.get(command.promotion_id)
        promotion.redeem(command.session_id, on_date=command.redeemed_on)
        repo.add(promotion)


def running_promotions(on_date: date | None = None, establishment_id=None, polo=None) -> list:
    """Promotions running on ``on_date`` (today by default), soonest ending first.

    ``polo`` keeps only promotions of establishments located in that polo.
    """
    on_date = on_date or datetime.now(UTC).date()
    query = current_domain.repository_for(Promotion)._dao.query.filter(starts_on__lte=on_date, ends_on__gte=on_date)

    if establishment_id is not None:
        query = query.filter(establishment_id=str(establishment_id))
    polo_ids = establishment_ids_in(polo)
    if polo_ids is not None:
        query = query.filter(establishment_id__in=polo_ids)

    return sorted(query.all().items, key=lambda p: (p.ends_on, p.name))
