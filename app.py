import streamlit as st

from directory.assistant import DirectoryAssistant
from directory.config import Settings
from directory.eval_utils import build_tests_from_examples, load_examples, run_offline_eval
from directory.log_utils import setup_logging


# --- Settings / logging ---
@st.cache_resource(show_spinner=False)
def _load_settings():
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return settings

settings = _load_settings()


# --- Directory data ---
@st.cache_resource(show_spinner="Loading directory data...")
def _load_assistant():
    return DirectoryAssistant(settings)

assistant = _load_assistant()


def _render_person(person):
    st.markdown(f"**{person.name}**")
    st.write(f"School: {person.school or 'Unknown'}")
    st.write(f"Department: {person.department or 'Unknown'}")
    st.write(f"Email: {person.email or 'N/A'}")
    building = assistant.get_building_info(person.office)
    if person.office and building:
        st.write(f"Office: {person.office} ({building.name} - {building.nickname})")
    else:
        st.write(f"Office: {person.office or 'Not specified'}")
    if person.office_hours:
        for day, hours in person.office_hours.items():
            st.write(f"{day}: {hours}")
    else:
        st.write("Office hours: Not specified")


def _render_club(club):
    st.markdown(f"**{club.name}** ({club.category})")
    if club.email != "N/A":
        st.write(f"Email: {club.email}")
    if club.social_link != "N/A":
        st.write(f"Instagram: {club.social_link}")
    if club.description:
        st.write(club.description)


# --- Streamlit UI ---------
st.set_page_config(page_title="HTU Directory Assistant", layout="centered")
st.title("HTU Directory Assistant")
st.subheader("Find doctors, departments, clubs and offices")

with st.sidebar:
    stats = assistant.get_stats()
    st.markdown(f"**{stats['total_doctors']}** doctors, **{stats['total_clubs']}** clubs")
    department = st.selectbox("Browse by department", [""] + assistant.get_departments())
    if st.button("Reload data"):
        result = assistant.reload()
        if result["ok"]:
            st.success(f"Reloaded: {result['doctors']} doctors, {result['clubs']} clubs")
        else:
            st.error(f"Reload failed: {result['error']}")

    with st.expander("Intent evaluation"):
        if st.button("Run intent eval"):
            accuracy, results = run_offline_eval(build_tests_from_examples(load_examples()))
            st.metric("Accuracy", f"{accuracy:.0%}")
            misses = [r for r in results if not r["ok"]]
            for r in misses:
                st.write(f"{r['query']!r}: expected {r['expected']}, got {r['predicted']}")
            if results and not misses:
                st.success(f"All {len(results)} examples passed")

if department:
    st.markdown(f"### {department}")
    for person in assistant.search_by_department(department):
        _render_person(person)

user_prompt = st.chat_input("Type a name, department, office code or question...")

if user_prompt:
    with st.chat_message("user", avatar=None):
        st.write(user_prompt)

    resolution = assistant.resolve(user_prompt)
    with st.chat_message("assistant", avatar=None):
        if resolution.intent:
            st.caption(f"Intent: {resolution.intent.intent.value} | entity: {resolution.intent.entity!r}")
        if resolution.department:
            st.markdown(f"### {resolution.department}")
            for person in resolution.department_faculty:
                _render_person(person)
        for person in resolution.people:
            _render_person(person)
        for club in resolution.clubs:
            _render_club(club)
        if not resolution.has_results:
            st.write(f'No results for "{user_prompt}".')
            suggestions = assistant.suggest(user_prompt) + assistant.suggest_clubs(user_prompt)
            if suggestions:
                st.markdown("**Did you mean:**")
                st.markdown("\n".join(f"* {s}" for s in dict.fromkeys(suggestions)))
