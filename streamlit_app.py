# streamlit_app.py: SmartSaver (Streamlit dashboard for water + electricity usage)
# Features:
# - Sign in with email/password or a Google ID credential, sign up, log out
# - Upload water / electricity spreadsheets to the SmartSaver backend
# - Dataset picker (Dataset N - Month-Year), summary metrics with Low/Average/High status
# - Charts per appliance, category split, monthly usage calendar
# - Month-to-month comparison across all datasets
# - SmartSaver assistant (keyword chat over the summary)
# - CSV export + PDF consumption report

import logging

import altair as alt
import pandas as pd
import streamlit as st

from smartsaver.api import ApiError, AuthError, SmartSaverClient, Unauthorized, display_name
from smartsaver.chatbot import ChatBot
from smartsaver.comparison import available_month_years, compare_months, comparison_analysis
from smartsaver.config import configure_logging, load_settings
from smartsaver.dates import first_month_year, parse_month_year_name
from smartsaver.profiles import ELECTRICITY_PROFILE, WATER_PROFILE, UtilityProfile
from smartsaver.report import build_report, report_filename
from smartsaver.sheets import column_series, load_sheet, usage_per_day_frame
from smartsaver.stats import (all_datasets_stats, category_totals, chart_kind, daily_totals,
                              summarize)
from smartsaver.status import classify, threshold_badge, usage_status
from smartsaver.usage_calendar import WEEKDAYS, month_grid

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger("smartsaver.app")

# ---------------- Streamlit config ----------------
st.set_page_config(page_title="SmartSaver | Water & Electricity", layout="wide")
st.markdown("<style>.block-container{padding-top:1rem;}</style>", unsafe_allow_html=True)


BADGE_COLORS = {"success": "green", "warning": "orange", "danger": "red"}


def init_session_state():
    defaults = {
        "token": None,
        "logged_in_user": None,
        "datasets": {},        # utility -> list[Dataset]
        "selected": {},        # utility -> dataset id
        "chatbots": {},        # utility -> ChatBot
        "comparison": {},      # utility -> list[MonthResult]
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


init_session_state()


def get_client() -> SmartSaverClient:
    return SmartSaverClient(settings.api_url, token=st.session_state.token, timeout=settings.timeout)


def store_login(result):
    st.session_state.token = result.token
    st.session_state.logged_in_user = result.logged_in_user()
    st.session_state.datasets = {}


def logout():
    for key in ("token", "logged_in_user"):
        st.session_state[key] = None
    for key in ("datasets", "selected", "chatbots", "comparison"):
        st.session_state[key] = {}


# ---------------- Sidebar (auth) ----------------
st.sidebar.header("SmartSaver")
st.sidebar.caption("Track your water and electricity. Save both.")

if not st.session_state.token:
    mode = st.sidebar.radio("Account", ["Log in", "Sign up"], horizontal=True)
    with st.sidebar.form("auth"):
        name = st.text_input("Name") if mode == "Sign up" else ""
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(mode)
    if submitted:
        client = get_client()
        try:
            if mode == "Sign up":
                result = client.signup(name.strip(), email.strip(), password)
            else:
                result = client.login(email.strip(), password)
            store_login(result)
            st.toast(f"{mode} successful!")
            st.rerun()
        except AuthError as e:
            st.sidebar.error(e.message)
        except ApiError as e:
            logger.error("Auth request failed: %s", e)
            st.sidebar.error("Something went wrong. Please try again!")

    with st.sidebar.expander("Continue with Google"):
        st.caption("Paste the Google ID credential issued for "
                   f"`{settings.google_client_id or 'your OAuth client'}`.")
        credential = st.text_input("Google credential", type="password", key="google_credential")
        if st.button("Sign in with Google") and credential:
            try:
                store_login(get_client().google_login(credential.strip()))
                st.toast("Google Login successful!")
                st.rerun()
            except AuthError as e:
                st.error(e.message)
            except ApiError as e:
                logger.error("Google login failed: %s", e)
                st.error("Something went wrong with Google Login!")

    st.title("💧⚡ SmartSaver")
    st.info("➡️ Log in or sign up in the sidebar to see your dashboard.")
    st.stop()

# profile (falls back to what login returned)
try:
    user = get_client().profile()
except Unauthorized:
    logout(); st.warning("Session expired. Please log in again."); st.stop()
except ApiError as e:
    logger.warning("Could not load profile: %s", e)
    user = st.session_state.logged_in_user or {}

st.sidebar.markdown(f"**Signed in as:** {display_name(user)}")
if st.sidebar.button("Log out"):
    logout(); st.rerun()


# ---------------- Helpers ----------------
def load_datasets(profile: UtilityProfile, refresh: bool = False):
    cache = st.session_state.datasets
    if refresh or profile.utility not in cache:
        try:
            cache[profile.utility] = get_client().list_datasets(profile.utility)
        except Unauthorized:
            logout(); st.warning("Session expired. Please log in again."); st.stop()
        except ApiError as e:
            logger.error("Error fetching %s datasets: %s", profile.utility, e)
            st.error(f"Could not load {profile.utility} datasets: {e.message}")
            cache[profile.utility] = []
    return cache[profile.utility]


def dataset_label(index: int, dataset) -> str:
    chart = dataset.analysis.chart_data
    my = first_month_year(chart.labels if chart else [])
    when = f"{my.month_name}-{my.year}" if my else "Unknown Date"
    return f"Dataset {index + 1} - {when}"


def series_chart(series, title: str, unit: str, color: str = "#4C9BE8"):
    df = series.frame()
    if df.empty:
        st.caption(f"No {title.lower()} data.")
        return
    kind = chart_kind(df["value"].tolist())
    base = alt.Chart(df, title=title)
    mark = {"bar": base.mark_bar(color=color),
            "line": base.mark_line(point=True, color=color),
            "point": base.mark_point(filled=True, color=color)}[kind]
    chart = mark.encode(
        x=alt.X("label:N", sort=None, title="Date"),
        y=alt.Y("value:Q", title=unit),
        tooltip=["label", alt.Tooltip("value:Q", format=".2f")])
    st.altair_chart(chart, width="stretch")


def calendar_chart(series, unit: str):
    title, weeks = month_grid(series)
    if not weeks:
        st.caption("No calendar available for this dataset.")
        return
    rows = []
    for w, week in enumerate(weeks):
        for d, cell in enumerate(week):
            if cell.day is not None:
                rows.append({"week": w, "weekday": WEEKDAYS[d], "day": cell.day,
                             "usage": cell.usage, "level": cell.level})
    df = pd.DataFrame(rows)
    base = alt.Chart(df, title=title).encode(
        x=alt.X("weekday:N", sort=WEEKDAYS, title=None, axis=alt.Axis(orient="top")),
        y=alt.Y("week:O", title=None, axis=None))
    rect = base.mark_rect(stroke="white").encode(
        color=alt.Color("usage:Q", scale=alt.Scale(scheme="purpleblue"), title=unit),
        tooltip=["day", alt.Tooltip("usage:Q", format=".1f"), "level"])
    text = base.mark_text(baseline="middle").encode(text="day:Q")
    st.altair_chart(rect + text, width="stretch")


def render_comparison(profile: UtilityProfile, datasets):
    st.markdown("#### 📊 Compare Months")
    options = [my.name for my in available_month_years(datasets)]
    if not options:
        st.caption("Upload datasets to compare months.")
        return
    picked = st.multiselect("Months", options, key=f"months_{profile.utility}")
    if st.button("Compare Selected Months", key=f"compare_{profile.utility}", disabled=len(picked) < 2):
        try:
            st.session_state.comparison[profile.utility] = compare_months(
                datasets, [parse_month_year_name(p) for p in picked], profile)
        except ValueError as e:
            st.warning(str(e))
    results = st.session_state.comparison.get(profile.utility)
    if not results:
        return
    unit = profile.unit
    table = pd.DataFrame([{
        "month": r.label + ("" if r.has_data else " (N/A)"),
        f"total ({unit})": round(r.total, 2),
        f"daily average ({unit})": round(r.daily_average, 2),
        **{f"{k} ({unit})": round(v, 2) for k, v in r.appliances.items()},
    } for r in results])
    st.dataframe(table, width="stretch", hide_index=True)
    analysis = comparison_analysis(results)
    if analysis:
        st.write(f"**Highest Usage:** {analysis.highest.label} ({analysis.highest.total:.2f} {unit})")
        st.write(f"**Lowest Usage:** {analysis.lowest.label} ({analysis.lowest.total:.2f} {unit})")
        if analysis.highest.total > 0 and analysis.lowest.total > 0:
            st.write(f"**Difference:** {analysis.difference:.2f} {unit} "
                     f"({analysis.percentage_diff:.1f}% increase)")


def render_chat(profile: UtilityProfile, summary, stats):
    bots = st.session_state.chatbots
    bot = bots.get(profile.utility)
    if bot is None:
        bot = bots[profile.utility] = ChatBot(profile.utility)
    bot.summary, bot.stats = summary, stats
    st.markdown("#### 🤖 SmartSaver Assistant")
    prompt = st.chat_input(f"Ask about your {profile.utility} usage...", key=f"chat_{profile.utility}")
    if prompt:
        bot.send(prompt)
    for msg in bot.messages:
        with st.chat_message(msg.role):
            st.markdown(msg.content.replace("\n", "  \n"))


def render_sheet_preview(upl):
    with st.expander("Preview spreadsheet before upload"):
        try:
            df = load_sheet(upl, upl.name)
        except (ValueError, ImportError) as e:
            st.warning(f"Could not read {upl.name}: {e}")
            return
        finally:
            upl.seek(0)
        st.dataframe(df.head(20), width="stretch", hide_index=True)
        cols = list(df.columns)
        if len(cols) < 2:
            return
        c1, c2 = st.columns(2)
        x = c1.selectbox("X column", cols, index=0, key=f"x_{upl.name}")
        y = c2.selectbox("Y column", cols, index=1, key=f"y_{upl.name}")
        series_chart(column_series(df, x, y), f"{y} by {x}", y)


def render_quick_check(upl, profile: UtilityProfile):
    """Day-by-day totals from the generic upload endpoint; nothing is saved to the dataset list."""
    if not st.button("Quick day-by-day check", key=f"quick_{profile.utility}"):
        return
    try:
        data = get_client().upload_generic(upl.name, upl.getvalue())
    except Unauthorized:
        logout(); st.warning("Session expired. Please log in again."); st.stop()
    except ApiError as e:
        logger.error("Quick check failed: %s", e)
        st.error(e.message)
        return
    df = usage_per_day_frame(data.get("usagePerDay"))
    if df.empty:
        st.caption("The backend returned no per-day usage for this file.")
        return
    st.dataframe(df, width="stretch", hide_index=True)
    chart = alt.Chart(df, title=f"{profile.title} per day").mark_line(point=True).encode(
        x=alt.X("day:N", sort=None, title="Day"),
        y=alt.Y(f"{profile.utility}:Q", title=profile.unit),
        tooltip=["day", alt.Tooltip(f"{profile.utility}:Q", format=".2f")])
    st.altair_chart(chart, width="stretch")


# ---------------- Utility page ----------------
def render_utility(profile: UtilityProfile):
    unit = profile.unit
    st.subheader(f"{profile.title} Analysis")

    # upload
    upl = st.file_uploader(f"Upload {profile.utility} dataset (CSV / Excel)",
                           type=["csv", "xlsx", "xls"], key=f"upload_{profile.utility}")
    if upl is not None:
        render_sheet_preview(upl)
        render_quick_check(upl, profile)
        if st.button("Upload", key=f"upload_btn_{profile.utility}"):
            try:
                get_client().upload(upl.name, upl.getvalue(), profile.utility)
                st.toast(f"{upl.name} uploaded")
                load_datasets(profile, refresh=True)
                st.session_state.selected.pop(profile.utility, None)
            except Unauthorized:
                logout(); st.warning("Session expired. Please log in again."); st.stop()
            except ApiError as e:
                logger.error("Error uploading file: %s", e)
                st.error("Error uploading file. Please try again.")

    datasets = load_datasets(profile)
    stats = all_datasets_stats(datasets, profile)
    if not datasets:
        st.info(f"No {profile.utility} datasets yet. Upload a spreadsheet above.")
        render_chat(profile, None, stats)
        return

    ids = [d.id for d in datasets]
    labels = {d.id: dataset_label(i, d) for i, d in enumerate(datasets)}
    current = st.session_state.selected.get(profile.utility, ids[0])
    chosen = st.selectbox("Select a dataset", ids, index=ids.index(current) if current in ids else 0,
                          format_func=labels.get, key=f"dataset_{profile.utility}")
    st.session_state.selected[profile.utility] = chosen
    dataset = datasets[ids.index(chosen)]
    summary = summarize(dataset.analysis, profile)

    # summary metrics
    c1, c2, c3 = st.columns(3)
    c1.metric(f"Total {profile.title}", f"{summary.total:.2f} {unit}")
    c1.caption(classify(summary.total, "total", stats, profile).message)
    c2.metric("Daily average", f"{summary.average:.2f} {unit}")
    c2.caption(classify(summary.average, "daily", stats, profile).message)
    c3.metric("Peak usage day", summary.peak_day, f"{summary.peak_value:.2f} {unit}", delta_color="off")
    badge = BADGE_COLORS[threshold_badge(summary.average, "daily", profile)]
    c3.caption(f"Usage status: :{badge}[{usage_status(summary, profile)}]")

    chart = dataset.analysis.chart_data
    if chart is not None:
        series_chart(chart, f"Total {profile.title} Usage Over Time", unit)

    st.markdown("#### Appliances")
    cols = st.columns(len(profile.appliances))
    for col, a in zip(cols, summary.appliances):
        col.metric(a.name, f"{a.total:.2f} {unit}")
        col.caption(f"Peak: {a.peak_day} ({a.peak_value:.2f} {unit})")
        col.caption(classify(a.total, a.kind, stats, profile).message)
    most = summary.most_intensive()
    if most is not None:
        st.write(f"**Most {profile.title}-Intensive Appliance:** {most.name} ({most.total:.2f} {unit})")

    cats = pd.DataFrame(list(category_totals(dataset.analysis, profile).items()),
                        columns=["appliance", "total"])
    if cats["total"].sum() > 0:
        pie = alt.Chart(cats, title=f"{profile.title} Usage by Category").mark_arc().encode(
            theta="total:Q", color="appliance:N", tooltip=["appliance", alt.Tooltip("total:Q", format=".2f")])
        st.altair_chart(pie, width="stretch")

    with st.expander("Appliance charts"):
        for a in profile.appliances:
            s = dataset.analysis.get(a.series_key)
            if s is not None:
                series_chart(s, f"{a.name} Usage", unit, "#4CE8A0")

    st.markdown("#### 📅 Monthly Usage Calendar")
    calendar_chart(chart, unit)

    if stats.dataset_count >= 2:
        st.markdown("#### Comparative Analysis")
        st.write(f"• **Dataset Comparison:** Analysis based on {stats.dataset_count} datasets")
        st.write(f"• **Your Total Usage vs Average:** {summary.total:.1f} {unit} vs {stats.total_average:.1f} {unit}")
        st.write(f"• **Your Daily Usage vs Average:** {summary.average:.1f} {unit} vs {stats.daily_average:.1f} {unit}")

    render_comparison(profile, datasets)
    render_chat(profile, summary, stats)

    # exports
    st.markdown("#### Export")
    e1, e2 = st.columns(2)
    e1.download_button("Download daily totals (CSV)",
                       daily_totals(chart).to_csv(index=False).encode("utf-8"),
                       file_name=f"smartsaver_{profile.utility}_daily.csv", mime="text/csv",
                       key=f"csv_{profile.utility}")
    if e2.button("Generate PDF report", key=f"pdf_{profile.utility}"):
        try:
            pdf = build_report(dataset, summary, stats, datasets, profile)
            e2.download_button("Download report (PDF)", pdf, file_name=report_filename(dataset, profile),
                               mime="application/pdf", key=f"pdf_dl_{profile.utility}")
        except ValueError as e:
            st.warning(str(e))


# ---------------- UI ----------------
st.title("💧⚡ SmartSaver Dashboard")
st.write("Upload your **water** or **electricity** usage spreadsheets. SmartSaver analyses them, "
         "compares months, answers questions and builds a downloadable **PDF report**.")

tab_water, tab_electricity = st.tabs(["💧 Water", "⚡ Electricity"])
with tab_water:
    render_utility(WATER_PROFILE)
with tab_electricity:
    render_utility(ELECTRICITY_PROFILE)

st.caption(f"Backend: {settings.api_url}")
