"""Unit tests for session.py — state container and selection pointer."""
from decimal import Decimal

from loan_partner.session import LoanSession

ZERO = Decimal("0")


def _yes(_prop) -> bool:
    return True


def _no(_prop) -> bool:
    return False


class TestStartup:
    def test_one_default_property(self):
        session = LoanSession()
        limits = session.limits()
        assert len(limits) == 1
        prop = limits[0].property
        assert prop.id == "1"
        assert prop.usage == "대지"
        assert prop.item_ltv == Decimal("70")
        assert session.total_limit() == ZERO

    def test_nothing_selected(self):
        assert LoanSession().selected_property_id is None

    def test_reserved_inputs(self):
        session = LoanSession()
        assert session.interest_rate == Decimal("4.5")
        assert session.annual_income == ZERO


class TestScenario:
    def test_second_property_drives_total(self):
        session = LoanSession()
        pid = session.add_property()
        session.update_property(pid, {
            "appraisal_value": 500000,
            "item_ltv": 60,
            "senior_deduction": 20000,
        })
        finals = {limit.property.id: limit.final_amt for limit in session.limits()}
        assert finals[pid] == Decimal("280000")
        assert finals["1"] == ZERO
        assert session.total_limit() == Decimal("280000")

    def test_removing_last_property_zeroes_total(self):
        session = LoanSession()
        session.update_property("1", {"appraisal_value": 100000})
        assert session.total_limit() == Decimal("70000")
        assert session.remove_property("1", _yes)
        assert session.total_limit() == ZERO

    def test_reserved_inputs_do_not_affect_total(self):
        session = LoanSession()
        session.update_property("1", {"appraisal_value": 100000})
        session.set_interest_rate("9.9")
        session.set_annual_income("80,000")
        assert session.annual_income == Decimal("80000")
        assert session.total_limit() == Decimal("70000")


class TestSelection:
    def test_add_opens_new_property(self):
        session = LoanSession()
        pid = session.add_property()
        assert session.selected_property_id == pid
        assert session.selected_property().id == pid

    def test_open_unknown_rejected(self):
        session = LoanSession()
        assert not session.open("missing")
        assert session.selected_property_id is None

    def test_close_keeps_edits(self):
        session = LoanSession()
        session.open("1")
        session.update_selected({"lot_number": "역삼동 123-4"})
        session.close()
        assert session.selected_property_id is None
        assert session.registry.get("1").lot_number == "역삼동 123-4"

    def test_edits_visible_before_close(self):
        session = LoanSession()
        session.open("1")
        session.update_selected({"appraisal_value": 100000})
        assert session.total_limit() == Decimal("70000")

    def test_update_selected_without_selection(self):
        assert LoanSession().update_selected({"usage": "x"}) is False

    def test_delete_selected_clears_pointer(self):
        session = LoanSession()
        pid = session.add_property()
        assert session.remove_property(pid, _yes)
        assert session.selected_property_id is None
        assert session.selected_property() is None

    def test_delete_other_keeps_pointer(self):
        session = LoanSession()
        pid = session.add_property()
        session.remove_property("1", _yes)
        assert session.selected_property_id == pid

    def test_delete_requires_confirmation(self):
        session = LoanSession()
        pid = session.add_property()
        assert not session.remove_property(pid, _no)
        assert pid in session.registry
        assert session.selected_property_id == pid

    def test_confirm_sees_property(self):
        session = LoanSession()
        seen = []
        session.remove_property("1", lambda prop: seen.append(prop.id) or False)
        assert seen == ["1"]

    def test_delete_absent_does_not_prompt(self):
        session = LoanSession()
        called = []
        assert not session.remove_property("missing", lambda prop: called.append(prop) or True)
        assert called == []


class TestLocation:
    def test_city_change_cascades(self):
        session = LoanSession()
        assert session.select_city("경기도")
        assert session.location.as_tuple() == ("경기도", "수원시 영통구", "매탄동", "")

    def test_village_noop_when_disabled(self):
        session = LoanSession()
        assert not session.select_village("수영리")
        assert session.location.village == ""

    def test_full_cascade(self):
        session = LoanSession()
        session.select_city("경기도")
        session.select_district("화성시")
        session.select_neighborhood("봉담읍")
        assert session.select_village("상리")
        assert session.location.label() == "경기도 화성시 봉담읍 상리"
