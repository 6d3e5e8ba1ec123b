import json
import streamlit as st
from core import state


def test_save_state_ignores_widget_keys(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    monkeypatch.setattr(state, "SESSION_FILE", str(file))
    st.session_state.clear()
    st.session_state["property_form"] = {"purchase_price": 500000.0}
    st.session_state["edit_utilities"] = True
    st.session_state["payment_model"] = object()
    state.save_state()
    data = json.loads(file.read_text())
    assert "edit_utilities" not in data
    assert "payment_model" not in data
    assert data["property_form"] == {"purchase_price": 500000.0}


def test_load_state_ignores_widget_keys(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    file.write_text(json.dumps({"gateway_model": "x/y", "confirm_hoa_fees": True}))
    monkeypatch.setattr(state, "SESSION_FILE", str(file))
    st.session_state.clear()
    state.load_state()
    assert st.session_state["gateway_model"] == "x/y"
    assert "confirm_hoa_fees" not in st.session_state


def test_load_state_tolerates_corrupt_file(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    file.write_text("{not json")
    monkeypatch.setattr(state, "SESSION_FILE", str(file))
    st.session_state.clear()
    state.load_state()
    assert "property_form" not in st.session_state


def test_payment_snapshot_not_persisted(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    monkeypatch.setattr(state, "SESSION_FILE", str(file))
    st.session_state.clear()
    st.session_state["monthly_payment"] = {"total": 3000.0}
    st.session_state["gateway_model"] = "x/y"
    state.save_state()
    data = json.loads(file.read_text())
    assert "monthly_payment" not in data
    assert data["gateway_model"] == "x/y"
