from __future__ import annotations

import streamlit as st

from client.proxy_client import ProxyClient, load_fixtures_sync
from core.state import AppState, select_competition, select_view
from core.view_model import (
    ALL_COMPETITIONS,
    VIEW_FINISHED,
    VIEW_LIVE,
    VIEW_TODAY,
    Card,
    ViewModel,
    build_view_model,
)

_VIEW_LABELS = {
    VIEW_LIVE: "Live",
    VIEW_FINISHED: "Terminate",
    VIEW_TODAY: "Oggi",
}


def _state() -> AppState:
    if "app_state" not in st.session_state:
        st.session_state["app_state"] = AppState()
        st.session_state["needs_load"] = True
    return st.session_state["app_state"]


def _competition_label(value: str) -> str:
    return "Tutte le competizioni" if value == ALL_COMPETITIONS else value


def _controls(state: AppState) -> None:
    cols = st.columns(len(_VIEW_LABELS) + 1)
    for col, (view, label) in zip(cols, _VIEW_LABELS.items()):
        kind = "primary" if state.current_view == view else "secondary"
        if col.button(label, key=f"btn_{view}", type=kind, use_container_width=True):
            select_view(state, view)
            st.rerun()
    if cols[-1].button("Aggiorna", key="btn_refresh", use_container_width=True):
        st.session_state["needs_load"] = True

    selected = st.selectbox(
        "Competizione",
        state.competitions,
        index=state.competitions.index(state.competition_filter),
        format_func=_competition_label,
    )
    if selected != state.competition_filter:
        select_competition(state, selected)


def _paint_card(card: Card) -> None:
    with st.container(border=True):
        head_logo, head_text = st.columns([1, 11])
        if card.league_logo:
            head_logo.image(card.league_logo, width=32)
        head_text.markdown(f"**{card.league_name}**  \n{card.league_round}")

        home, score, away = st.columns([5, 2, 5])
        if card.home.logo:
            home.image(card.home.logo, width=40)
        home.write(card.home.name)
        score.markdown(f"### {card.home.score} - {card.away.score}")
        if card.away.logo:
            away.image(card.away.logo, width=40)
        away.write(card.away.name)

        st.caption(f"{card.date_text} · {card.status_text} · {card.venue_text} · {card.referee_text}")

        if card.events:
            st.markdown("**Eventi:**")
            for ev in card.events:
                line = f"{ev.time} {ev.type} - {ev.detail}".strip()
                if ev.player:
                    line += f": {ev.player}"
                if ev.assist:
                    line += f" (Assist: {ev.assist})"
                st.write(line)


def _paint(vm: ViewModel) -> None:
    if vm.notice:
        st.warning(vm.notice)
    if vm.placeholder:
        st.info(vm.placeholder)
        return
    for card in vm.cards:
        _paint_card(card)


def _repaint(board, state: AppState) -> None:
    with board.container():
        _paint(build_view_model(state))


def main() -> None:
    st.set_page_config(page_title="Risultati calcio", layout="wide")
    st.title("Risultati calcio")

    state = _state()
    _controls(state)

    board = st.empty()
    _repaint(board, state)
    if st.session_state.pop("needs_load", False):
        # Ogni collezione ridisegna la vista appena arriva, se la vista attiva ne dipende
        load_fixtures_sync(state, ProxyClient(), on_update=lambda kind: _repaint(board, state))
        # Nuovo giro per aggiornare anche le opzioni del filtro competizioni
        st.rerun()


if __name__ == "__main__":
    main()
