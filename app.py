# app.py
import logging
import sys

import pandas as pd
import streamlit as st

from config_data import *  # static texts and tables
from charts import (
    plot_board,
    plot_coverage_steps,
    plot_cumulative_risk,
    plot_disability_breakdown,
    plot_expense_breakdown,
    plot_risk_breakdown,
    plot_risk_causes,
    plot_risk_waterfall,
    plot_survivor_phases,
    plot_survivor_timeline,
    plot_zone_costs,
)
from customer_profile import (
    CHILD_MAX_AGE,
    EXPENSE_DETAIL_LABELS,
    MAX_CHILDREN,
    OLD_AGE_START_RANGE,
    SPOUSE_TYPES,
    load_profile,
    resize_children_ages,
    sample_couple_profile,
    save_profile,
)
from disability_pension import (
    calculate_disability_from_periods,
    calculate_disability_pension_amounts,
    disability_rules_summary,
)
from education_costs import EDUCATION_COURSE_LABELS, calculate_household_education_cost
from firebase_setup import init_firebase, missing_config
from necessary_coverage import (
    END_AGE_MODES,
    SCENARIOS,
    CoverageSettings,
    build_monthly_layers,
    calculate_all_scenarios,
    current_salary_monthly,
    resolve_end_age,
    scenario_frame,
    segment_change_points,
)
from pension_calc import (
    POLICY_MODES,
    CareerPeriod,
    calculate_chukorei_kasan,
    calculate_lump_sum_death,
    calculate_widow_pension,
    format_currency,
    format_year_month_man,
    generate_timeline,
)
from report_pdf import build_coverage_report
from risk_board import (
    QUADRANTS,
    FirebaseBoardStore,
    LocalBoardStore,
    PanelBoard,
    PanelNotFoundError,
    new_session_id,
    new_user_id,
)
from risk_stats import cumulative_risk, quadrant_titles, risk_comment
from survivor_pension import (
    PensionSource,
    calculate_survivor_pension_amounts,
    derive_child_phases,
    phase_rows,
)

st.set_page_config(page_title="Life Planning Simulators", layout="wide")

logging.basicConfig(stream=sys.stdout, level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

BOARD_REFRESH_SECONDS = 2


def render_text_sheet(sheet_name, profile=None):
    st.header(sheet_name)
    if sheet_name == "AboutApp":
        st.markdown(ABOUT_APP_TEXT)
    elif sheet_name == "Disclaimer":
        st.info(DISCLAIMER_INTRO)
        for section in DISCLAIMER_SECTIONS:
            with st.container(border=True):
                st.subheader(section['Section'])
                for title, text in section['Items']:
                    st.markdown(f"**{title}**")
                    st.markdown(text)


def render_profile_page(sheet_name, profile):
    st.header("👤 基本情報設定")
    st.markdown("家族構成と収入を入力してください。すべてのシミュレーションの基礎となります。")

    if st.button("サンプルデータを読み込む"):
        st.session_state.profile = sample_couple_profile()
        st.rerun()

    with st.container(border=True):
        st.subheader("👪 家族構成")
        spouse_keys = list(SPOUSE_TYPES)
        current = profile.spouse_type if profile.spouse_type in spouse_keys else "couple"
        profile.spouse_type = st.radio("世帯", spouse_keys, index=spouse_keys.index(current),
                                       format_func=SPOUSE_TYPES.get, horizontal=True)
        count = st.number_input("子どもの人数", min_value=0, max_value=MAX_CHILDREN,
                                value=int(profile.children_count or 0))
        profile.children_count = int(count)
        profile.children_ages = resize_children_ages(profile.children_ages, profile.children_count)
        if profile.children_count:
            cols = st.columns(profile.children_count)
            for i, col in enumerate(cols):
                with col:
                    profile.children_ages[i] = int(st.number_input(
                        f"第{i + 1}子の年齢", min_value=0, max_value=CHILD_MAX_AGE,
                        value=int(profile.children_ages[i]), key=f"child_age_{i}"))

    low, high = OLD_AGE_START_RANGE
    if profile.is_couple:
        col1, col2 = st.columns(2)
        for col, person, title in ((col1, "husband", "👨 夫"), (col2, "wife", "👩 妻")):
            with col:
                with st.container(border=True):
                    st.subheader(title)
                    age = getattr(profile, f"age_{person}") or 30
                    setattr(profile, f"age_{person}", int(st.number_input(
                        "年齢", min_value=18, max_value=100, value=int(age), key=f"age_{person}")))
                    start = getattr(profile, f"old_age_start_{person}") or 65
                    setattr(profile, f"old_age_start_{person}", int(st.slider(
                        "老齢年金の受給開始年齢", low, high, int(start), key=f"start_{person}")))
                    setattr(profile, f"annual_income_{person}", st.number_input(
                        "年収（額面・円）", min_value=0, step=100000,
                        value=int(getattr(profile, f"annual_income_{person}") or 0), key=f"income_{person}"))
                    setattr(profile, f"avg_std_monthly_{person}", st.number_input(
                        "平均標準報酬額（月額・円）", min_value=0, step=10000,
                        value=int(getattr(profile, f"avg_std_monthly_{person}") or 0), key=f"avg_{person}"))
                    setattr(profile, f"months_{person}", int(st.number_input(
                        "厚生年金の加入月数", min_value=0, max_value=600,
                        value=int(getattr(profile, f"months_{person}")), key=f"months_{person}")))
                    setattr(profile, f"use_minashi_300_{person}", st.checkbox(
                        "300月みなしを適用", value=getattr(profile, f"use_minashi_300_{person}"),
                        key=f"minashi_{person}"))
    else:
        with st.container(border=True):
            st.subheader("🧑 本人")
            profile.age = int(st.number_input("年齢", min_value=18, max_value=100, value=int(profile.age or 30)))
            profile.old_age_start = int(st.slider("老齢年金の受給開始年齢", low, high,
                                                  int(profile.old_age_start or 65)))
            profile.annual_income = st.number_input("年収（額面・円）", min_value=0, step=100000,
                                                    value=int(profile.annual_income or 0))
            profile.has_employee_pension = st.checkbox("厚生年金に加入している", value=profile.has_employee_pension)
            if profile.has_employee_pension:
                profile.avg_std_monthly = st.number_input("平均標準報酬額（月額・円）", min_value=0, step=10000,
                                                          value=int(profile.avg_std_monthly or 0))
                profile.employee_pension_months = int(st.number_input(
                    "厚生年金の加入月数", min_value=0, max_value=600, value=int(profile.employee_pension_months)))
                profile.use_minashi_300 = st.checkbox("300月みなしを適用", value=profile.use_minashi_300)

    with st.container(border=True):
        st.subheader("💴 生活費")
        cols = st.columns(2)
        for i, (key, label) in enumerate(EXPENSE_DETAIL_LABELS.items()):
            with cols[i % 2]:
                profile.details[key] = st.number_input(f"{label}（月額・円）", min_value=0, step=1000,
                                                       value=int(profile.details.get(key, 0) or 0),
                                                       key=f"detail_{key}")
        profile.monthly_living_expense = profile.details_total()
        st.metric("月間生活費の合計", f"{format_currency(profile.monthly_living_expense)}円")
        fig = plot_expense_breakdown(profile.details)
        if fig is not None:
            st.plotly_chart(fig, use_container_width=True)

    if profile.children_ages:
        with st.expander("🎓 教育費の目安"):
            course = st.selectbox("進学コース", list(EDUCATION_COURSE_LABELS), format_func=EDUCATION_COURSE_LABELS.get)
            cram_cols = st.columns(3)
            cram_school = {
                "elementary": cram_cols[0].checkbox("小学校で塾", key="cram_elementary"),
                "junior_high": cram_cols[1].checkbox("中学校で塾", key="cram_junior_high"),
                "high_school": cram_cols[2].checkbox("高校で塾", key="cram_high_school"),
            }
            monthly = calculate_household_education_cost(course, profile.children_ages, cram_school)
            st.metric("現在の教育費（月額）", f"{format_currency(monthly)}円")

    if st.button("💾 保存する", type="primary"):
        path = save_profile(profile)
        st.success(f"基本情報を保存しました ({path})")


def _couple_required(profile):
    if not profile.is_couple:
        st.warning("このシミュレーターは夫婦世帯が対象です。「Customer Profile」で世帯を「夫婦」に設定してください。")
        return False
    return True


def render_survivor_page(sheet_name, profile):
    st.header("🕊️ 遺族年金シミュレーター")
    if not _couple_required(profile):
        return

    col1, col2 = st.columns(2)
    with col1:
        deceased = st.radio("亡くなった方", ["husband", "wife"], horizontal=True,
                            format_func={"husband": "夫", "wife": "妻"}.get)
    with col2:
        mode = st.radio("制度", list(POLICY_MODES), horizontal=True,
                        format_func=lambda key: POLICY_MODES[key]["name"])
        st.caption(POLICY_MODES[mode]["description"])

    is_wife_death = deceased == "wife"
    survivor = "husband" if is_wife_death else "wife"
    survivor_source = PensionSource(getattr(profile, f"avg_std_monthly_{deceased}"),
                                    getattr(profile, f"months_{deceased}"),
                                    getattr(profile, f"use_minashi_300_{deceased}"))
    own_source = PensionSource(getattr(profile, f"avg_std_monthly_{survivor}"),
                               getattr(profile, f"months_{survivor}"))
    old_age_start = getattr(profile, f"old_age_start_{survivor}") or 65
    survivor_age = getattr(profile, f"age_{survivor}")

    result = calculate_survivor_pension_amounts(
        profile.age_wife, profile.age_husband, profile.children_ages,
        survivor_source, own_source, old_age_start, is_wife_death, mode)

    metric_cols = st.columns(3)
    metric_cols[0].metric("子のいる期間", format_year_month_man(result.with_children_amount))
    metric_cols[1].metric("子が18歳到達後", format_year_month_man(result.after_children_amount))
    metric_cols[2].metric("老齢年金期間", format_year_month_man(result.old_age_amount))

    rows = phase_rows(result, survivor_age, old_age_start)
    st.plotly_chart(plot_survivor_phases(rows), use_container_width=True)
    st.dataframe(pd.DataFrame(rows), use_container_width=True)

    phases = derive_child_phases(profile.children_ages)
    if phases:
        with st.expander("子の人数による期間区分"):
            st.dataframe(pd.DataFrame(phases).rename(columns={"years": "年数", "count": "対象の子の数"}),
                         use_container_width=True)

    pension_amounts = {
        "basic": result.basic_pension,
        "employee": result.employee_pension,
        "chukorei": calculate_chukorei_kasan() if mode == "current" else 0,
    }
    timeline = generate_timeline(survivor_age, 90, profile.children_ages, pension_amounts,
                                 is_wife=not is_wife_death, old_age_start=old_age_start)
    st.plotly_chart(plot_survivor_timeline(timeline), use_container_width=True)

    with st.expander("その他の給付（国民年金独自給付）"):
        months = getattr(profile, f"months_{deceased}")
        st.markdown(f"- 死亡一時金: **{format_currency(calculate_lump_sum_death(months))}円**")
        if not is_wife_death:
            widow = calculate_widow_pension(survivor_source.avg_std_monthly, months)
            st.markdown(f"- 寡婦年金（60〜64歳）: **{format_currency(widow)}円/年**")

    with st.expander("遺族年金の主なルール"):
        st.dataframe(pd.DataFrame(SURVIVOR_RULES_DATA), use_container_width=True)


def render_disability_page(sheet_name, profile):
    st.header("♿ 障害年金シミュレーター")
    if profile.is_couple:
        person = st.radio("障害状態になる方", ["husband", "wife"], horizontal=True,
                          format_func={"husband": "夫", "wife": "妻"}.get)
        spouse = "wife" if person == "husband" else "husband"
        avg = getattr(profile, f"avg_std_monthly_{person}")
        months = getattr(profile, f"months_{person}")
        minashi = getattr(profile, f"use_minashi_300_{person}")
        has_spouse, age_spouse = True, getattr(profile, f"age_{spouse}")
    else:
        avg, months, minashi = profile.avg_std_monthly, profile.employee_pension_months, profile.use_minashi_300
        has_spouse, age_spouse = False, None

    level = st.radio("障害等級", [1, 2, 3], index=1, horizontal=True, format_func=lambda v: f"{v}級")
    use_periods = st.checkbox("加入期間ごとに入力する（2003年3月以前／4月以降で計算）")

    if use_periods:
        default_periods = pd.DataFrame([
            {"start": "1998/04", "end": "2003/03", "avg_std_monthly_before_2003": 250000,
             "avg_std_amount_after_2003": 0},
            {"start": "2003/04", "end": "2024/03", "avg_std_monthly_before_2003": 0,
             "avg_std_amount_after_2003": 350000},
        ])
        edited = st.data_editor(default_periods, num_rows="dynamic", use_container_width=True)
        try:
            periods = [CareerPeriod(**row) for row in edited.dropna().to_dict("records")]
            result = calculate_disability_from_periods(level, periods, has_spouse, age_spouse,
                                                       profile.children_ages, minashi)
        except ValueError as e:
            st.error(f"加入期間の入力が正しくありません: {e}")
            return
    else:
        result = calculate_disability_pension_amounts(level, has_spouse, age_spouse, profile.children_ages,
                                                      avg, months, minashi)

    metric_cols = st.columns(3)
    metric_cols[0].metric("障害基礎年金", f"{format_currency(result.basic_pension)}円")
    metric_cols[1].metric("障害厚生年金", f"{format_currency(result.employee_pension)}円")
    metric_cols[2].metric("合計（年額）", format_year_month_man(result.total))
    st.plotly_chart(plot_disability_breakdown(result), use_container_width=True)

    with st.expander("障害年金の主なルール"):
        st.dataframe(pd.DataFrame(disability_rules_summary()), use_container_width=True)


def render_coverage_page(sheet_name, profile):
    st.header("🛡️ 必要保障額シミュレーター")
    if not profile.monthly_living_expense:
        st.warning("「Customer Profile」で生活費を入力してください。")
        return

    with st.expander("⚙️ 前提条件", expanded=False):
        c1, c2 = st.columns(2)
        with c1:
            survivor_ratio = st.slider("死亡時の生活費（現在比 %）", 50, 100, 70)
            disability_ratio = st.slider("障害時の生活費（現在比 %）", 80, 150, 110)
        with c2:
            work_ratio = st.slider("配偶者の就労収入（現在比 %）", 0, 100, 90)
            savings = st.number_input("現在の貯蓄額（円）", min_value=0, step=100000, value=0)
        settings = CoverageSettings(survivor_ratio, disability_ratio, work_ratio, savings)

    keys = [key for key in SCENARIOS if key.startswith("single") != profile.is_couple]
    end_ages = {}
    with st.expander("📅 保障期間", expanded=False):
        for key in keys:
            cols = st.columns(2)
            mode = cols[0].selectbox(key, list(END_AGE_MODES), format_func=END_AGE_MODES.get, key=f"end_{key}")
            custom = None
            if mode == "custom":
                custom = cols[1].number_input("終了年齢", min_value=20, max_value=100, value=65, key=f"custom_{key}")
            end_ages[key] = resolve_end_age(profile, mode, custom)

    results = calculate_all_scenarios(profile, end_ages, settings)

    tabs = st.tabs([result.title for result in results.values()])
    for tab, result in zip(tabs, results.values()):
        with tab:
            metric_cols = st.columns(3)
            metric_cols[0].metric("不足額の合計", f"{format_currency(result.total_shortfall)}円")
            metric_cols[1].metric("貯蓄充当後の必要保障額", f"{format_currency(result.net_shortfall)}円")
            metric_cols[2].metric("最大の月間不足額", f"{format_currency(result.monthly_shortfall_max)}円")
            if result.has_shortfall:
                st.error(f"{result.end_age}歳までに {format_currency(result.net_shortfall)}円 の備えが必要です。")
            else:
                st.success("公的給付と貯蓄で必要額をカバーできています。")
            if result.exempted_housing_loan:
                st.caption(f"団体信用生命保険により免除される住宅ローン: {format_currency(result.exempted_housing_loan)}円")

            salary = current_salary_monthly(profile, result.target)
            layers = build_monthly_layers(result.data, salary, result.end_age,
                                          show_allowances=result.category == "survivor")
            st.plotly_chart(plot_coverage_steps(segment_change_points(layers), salary), use_container_width=True)
            with st.expander("年次データ"):
                st.dataframe(scenario_frame(result), use_container_width=True)

    st.download_button(
        label="📥 Download as PDF",
        data=build_coverage_report(profile, results, settings),
        file_name="necessary_coverage.pdf",
        mime="application/pdf",
    )


def render_risk_matrix_page(sheet_name, profile=None):
    st.header("📊 家計のリスク分析")
    titles = quadrant_titles()
    cols = st.columns(2)
    for i, quadrant in enumerate(RISK_MATRIX_QUADRANTS):
        with cols[i % 2]:
            with st.container(border=True):
                st.subheader(quadrant['Quadrant'])
                st.caption(quadrant['Advice'])
                for title in titles[quadrant['Quadrant']]:
                    st.markdown(f"- {title}")

    for zone, description, risks in (("A", ZONE_A_DESCRIPTION, ZONE_A_RISKS), ("B", ZONE_B_DESCRIPTION, ZONE_B_RISKS)):
        st.subheader(f"{zone}ゾーン")
        st.markdown(description)
        st.plotly_chart(plot_zone_costs(zone), use_container_width=True)
        for risk in risks:
            with st.expander(risk['Title']):
                st.markdown(f"**費用**: {risk['Cost']}")
                st.markdown(f"**発生頻度**: {risk['Frequency']}")
                st.markdown(f"**根拠**: {risk['Rationale']}")
                st.caption(f"出典: {risk['Evidence']}")


def render_probability_page(sheet_name, profile=None):
    st.header("📈 死亡・障害の確率")
    st.markdown(PROBABILITY_SUMMARY)

    age = st.slider("年齢", 20, 65, 40)
    value = cumulative_risk(age)
    st.metric(f"20歳から{age}歳までの累積確率", f"{value}%")
    st.info(risk_comment(age))
    st.plotly_chart(plot_cumulative_risk(age, value), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(plot_risk_breakdown(), use_container_width=True)
    with col2:
        st.plotly_chart(plot_risk_causes(), use_container_width=True)
    st.plotly_chart(plot_risk_waterfall(), use_container_width=True)
    st.caption(PROBABILITY_TOTAL_LABEL)

    with st.expander("根拠データ"):
        st.dataframe(pd.DataFrame(PROBABILITY_EVIDENCE_DATA), use_container_width=True)


# --- Risk board ---

def get_board(session_id, user_name):
    board = st.session_state.get("board")
    if board is not None and board.session_id == session_id:
        return board
    if board is not None:
        board.leave()

    root = init_firebase()
    if root is not None:
        store = FirebaseBoardStore(root, session_id)
    else:
        store = LocalBoardStore(session_id)
    board = PanelBoard(store, st.session_state.board_user_id, user_name)
    board.join()
    board.sync()
    st.session_state.board = board
    return board


@st.fragment(run_every=BOARD_REFRESH_SECONDS)
def board_live_view(board):
    board.throttle.poll()
    board.heartbeat()
    panels = board.sync()
    st.plotly_chart(plot_board(panels, highlight_user=board.user_id), use_container_width=True)
    users = board.active_users()
    st.caption("参加中: " + ", ".join(user.get("userName", "?") for user in users))


def render_board_page(sheet_name, profile=None):
    st.header("🧩 リスク整理ワーク")
    st.markdown(BOARD_HELP_TEXT)

    if "board_user_id" not in st.session_state:
        st.session_state.board_user_id = new_user_id()
    if "board_session_id" not in st.session_state:
        st.session_state.board_session_id = st.query_params.get("session") or new_session_id()

    missing = missing_config()
    if missing:
        st.warning(f"オフラインモードで動作しています（未設定: {', '.join(missing)}）。")

    with st.sidebar:
        session_id = st.text_input("セッションID", value=st.session_state.board_session_id)
        user_name = st.text_input("表示名", value=st.session_state.get("board_user_name", "ユーザー"))
    st.session_state.board_session_id = session_id
    st.query_params["session"] = session_id

    board = get_board(session_id, user_name)
    if user_name and user_name != board.user_name:
        board.rename(user_name)
        st.session_state.board_user_name = board.user_name

    board_live_view(board)

    panels = board.list_panels()
    with st.container(border=True):
        st.subheader("カードの操作")
        if panels:
            panel_ids = [panel["id"] for panel in panels]
            by_id = {panel["id"]: panel for panel in panels}
            panel_id = st.selectbox("カード", panel_ids, format_func=lambda pid: by_id[pid]["text"])
            panel = by_id[panel_id]
            c1, c2, c3 = st.columns(3)
            x = c1.number_input("X", min_value=0, value=int(panel["x"]), step=10, key=f"x_{panel_id}")
            y = c2.number_input("Y", min_value=0, value=int(panel["y"]), step=10, key=f"y_{panel_id}")
            width = c3.number_input("幅", min_value=100, value=max(100, int(panel["width"])), step=10,
                                    key=f"w_{panel_id}")
            text = st.text_input("テキスト", value=panel["text"], key=f"text_{panel_id}")

            b1, b2, b3 = st.columns(3)
            try:
                if b1.button("更新"):
                    if (x, y) != (panel["x"], panel["y"]):
                        board.move_panel(panel_id, x, y)
                    if width != panel["width"]:
                        board.resize_panel(panel_id, width)
                    board.end_interaction(panel_id)
                    if text != panel["text"]:
                        board.edit_text(panel_id, text)
                    st.rerun()
                if b2.button("削除"):
                    board.delete_panel(panel_id)
                    st.rerun()
            except PanelNotFoundError:
                st.warning("このカードは他の参加者によって削除されました。")
            if b3.button("カードを追加"):
                board.add_panel()
                st.rerun()
        elif st.button("カードを追加"):
            board.add_panel()
            st.rerun()

    with st.expander("配置の集計"):
        summary = board.quadrant_summary()
        cols = st.columns(2)
        for i, (key, texts) in enumerate(summary.items()):
            with cols[i % 2]:
                st.markdown(f"**{QUADRANTS[key]['label']}** ({QUADRANTS[key]['advice']})")
                for text in texts:
                    st.markdown(f"- {text}")

    with st.expander("ボードのリセット"):
        confirm = st.checkbox("すべてのカードを削除して初期状態に戻す")
        if st.button("リセット", disabled=not confirm):
            board.reset()
            st.rerun()

    if st.sidebar.button("ボードから退出"):
        board.leave()
        del st.session_state["board"]
        del st.session_state["board_session_id"]
        st.rerun()


# --- Navigation ---

if "profile" not in st.session_state:
    st.session_state.profile = load_profile()
profile = st.session_state.profile

pages = ["AboutApp", "Customer Profile", "Survivor Pension", "Disability Pension", "Necessary Coverage",
         "Household Risk Matrix", "Death & Disability Probability", "Risk Board", "Disclaimer"]

if "page" not in st.session_state or st.session_state.page not in pages:
    st.session_state.page = "AboutApp"

with st.sidebar:
    selection = st.radio("Go to", pages, index=pages.index(st.session_state.page))
    if selection != st.session_state.page:
        st.session_state.page = selection
        st.rerun()

pages_config = {
    "AboutApp": {"render_func": render_text_sheet},
    "Customer Profile": {"render_func": render_profile_page},
    "Survivor Pension": {"render_func": render_survivor_page},
    "Disability Pension": {"render_func": render_disability_page},
    "Necessary Coverage": {"render_func": render_coverage_page},
    "Household Risk Matrix": {"render_func": render_risk_matrix_page},
    "Death & Disability Probability": {"render_func": render_probability_page},
    "Risk Board": {"render_func": render_board_page},
    "Disclaimer": {"render_func": render_text_sheet},
}

selected_page = pages_config[st.session_state.page]
selected_page["render_func"](st.session_state.page, profile)
