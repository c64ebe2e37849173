import pytest
from decimal import Decimal, ROUND_HALF_UP

from hypothesis import given, strategies as st

from apps.sales.services import calculate_settlement, InvalidAmountError


class TestCalculateSettlement:

    def test_profitable_sale(self):
        figures = calculate_settlement(
            sold_price=Decimal('13000'),
            purchase_price=Decimal('10000'),
            additional_expenses=Decimal('500'),
            fee_percentage=Decimal('10'),
        )

        assert figures.total_cost == Decimal('10500')
        assert figures.profit == Decimal('2500')
        assert figures.fee_amount == Decimal('250')
        assert figures.net_profit == Decimal('2250')

    def test_loss_has_no_fee(self):
        figures = calculate_settlement(
            sold_price=Decimal('9000'),
            purchase_price=Decimal('10000'),
            additional_expenses=Decimal('0'),
            fee_percentage=Decimal('10'),
        )

        assert figures.profit == Decimal('-1000')
        assert figures.fee_amount == 0
        assert figures.net_profit == Decimal('-1000')

    def test_break_even_has_no_fee(self):
        figures = calculate_settlement(Decimal('100'), Decimal('60'), Decimal('40'), Decimal('25'))

        assert figures.profit == 0
        assert figures.fee_amount == 0

    def test_exact_until_rounded(self):
        figures = calculate_settlement(Decimal('100.01'), Decimal('0'), Decimal('0'), Decimal('12.5'))

        assert figures.fee_amount == Decimal('12.50125')

        stored = figures.rounded()
        assert stored.fee_amount == Decimal('12.50')
        assert stored.net_profit == Decimal('87.51')
        assert stored.net_profit == stored.profit - stored.fee_amount

    def test_rounding_half_up(self):
        figures = calculate_settlement(Decimal('0.05'), Decimal('0'), Decimal('0'), Decimal('50')).rounded()

        assert figures.fee_amount == Decimal('0.03')

    def test_fee_uses_percentage_as_stored(self):
        figures = calculate_settlement(Decimal('1000000'), Decimal('0'), Decimal('0'), Decimal('33.333333'))

        assert figures.fee_percentage == Decimal('33.3333')
        assert figures.fee_amount == Decimal('333333')
        assert figures.rounded().fee_percentage == figures.fee_percentage

    def test_accepts_strings(self):
        figures = calculate_settlement('13000', '10000', '500', '10')

        assert figures.net_profit == Decimal('2250')

    @pytest.mark.parametrize('field', ['sold_price', 'purchase_price', 'additional_expenses', 'fee_percentage'])
    @pytest.mark.parametrize('bad', [Decimal('-1'), Decimal('NaN'), Decimal('Infinity'), 'abc'])
    def test_rejects_invalid_inputs(self, field, bad):
        kwargs = {
            'sold_price': Decimal('1'),
            'purchase_price': Decimal('1'),
            'additional_expenses': Decimal('0'),
            'fee_percentage': Decimal('5'),
        }
        kwargs[field] = bad

        with pytest.raises(InvalidAmountError):
            calculate_settlement(**kwargs)


money = st.decimals(min_value=Decimal('0'), max_value=Decimal('10000000'), places=2)
percentages = st.decimals(min_value=Decimal('0'), max_value=Decimal('100'), places=4)
fine_percentages = st.decimals(min_value=Decimal('0'), max_value=Decimal('100'), places=6)


class TestSettlementProperties:

    @given(sold=money, purchase=money, expenses=money, fee=percentages)
    def test_net_is_profit_minus_fee(self, sold, purchase, expenses, fee):
        figures = calculate_settlement(sold, purchase, expenses, fee)

        assert figures.net_profit == figures.profit - figures.fee_amount
        assert figures.profit == sold - purchase - expenses

    @given(sold=money, purchase=money, expenses=money, fee=percentages)
    def test_no_fee_on_loss(self, sold, purchase, expenses, fee):
        figures = calculate_settlement(sold, purchase, expenses, fee)

        if figures.profit <= 0:
            assert figures.fee_amount == 0
            assert figures.net_profit == figures.profit
        else:
            assert 0 <= figures.fee_amount <= figures.profit

    @given(sold=money, purchase=money, expenses=money, fee=percentages)
    def test_rounded_figures_stay_consistent(self, sold, purchase, expenses, fee):
        stored = calculate_settlement(sold, purchase, expenses, fee).rounded()

        assert stored.net_profit == stored.profit - stored.fee_amount
        if stored.profit <= 0:
            assert stored.fee_amount == 0

    @given(sold=money, purchase=money, expenses=money, fee=fine_percentages)
    def test_stored_fee_reproducible_from_stored_percentage(self, sold, purchase, expenses, fee):
        stored = calculate_settlement(sold, purchase, expenses, fee).rounded()

        if stored.profit > 0:
            recomputed = (stored.profit * stored.fee_percentage / 100).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
            assert recomputed == stored.fee_amount
