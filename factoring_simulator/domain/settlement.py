"""Net settlement of a factoring operation"""

from dataclasses import dataclass, field

from factoring_simulator.domain.money import Money, Percentage


@dataclass(frozen=True)
class NetCalculation:
    """
    Amount paid to the client after deságio and taxes.

    net = face value - deságio - taxes
    effective discount = (face value - net) / face value

    The net amount is not checked here; callers must reject net <= 0.
    """

    duplicata_face_value: Money
    total_desagio: Money
    total_taxes: Money
    net_amount: Money = field(init=False)
    effective_discount: Percentage = field(init=False)

    def __post_init__(self) -> None:
        net = self.duplicata_face_value.subtract(self.total_desagio).subtract(self.total_taxes)
        discount = self.duplicata_face_value.subtract(net)
        object.__setattr__(self, "net_amount", net)
        object.__setattr__(
            self,
            "effective_discount",
            Percentage.from_decimal(discount.amount / self.duplicata_face_value.amount),
        )

    @property
    def total_deductions(self) -> Money:
        return self.total_desagio.add(self.total_taxes)
