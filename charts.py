# charts.py
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config_data import (
    PROBABILITY_AGES,
    PROBABILITY_BREAKDOWN,
    PROBABILITY_CAUSES,
    PROBABILITY_CUMULATIVE,
    ZONE_CHART_MAX,
)
from customer_profile import EXPENSE_DETAIL_LABELS
from risk_board import BOARD_SIZE, classify_panel
from risk_stats import waterfall_steps, zone_frame

LAYER_COLORS = {
    "pension": "#10B981",
    "allowances": "#86EFAC",
    "gray": "#94a3b8",
    "shortfall": "#EF4444",
    "surplus": "#3B82F6",
}

LAYER_LABELS = {
    "pension": "公的年金",
    "allowances": "児童手当・児童扶養手当",
    "gray": "不要額（住宅ローン・故人の生活費）",
    "shortfall": "不足額",
    "surplus": "余剰額",
}

QUADRANT_COLORS = {
    "frequent_small": "rgba(59, 130, 246, 0.08)",
    "frequent_large": "rgba(239, 68, 68, 0.08)",
    "rare_small": "rgba(34, 197, 94, 0.08)",
    "rare_large": "rgba(234, 179, 8, 0.08)",
}


def plot_expense_breakdown(details):
    df = pd.DataFrame([
        {"Item": EXPENSE_DETAIL_LABELS[key], "Monthly": details.get(key, 0) or 0}
        for key in EXPENSE_DETAIL_LABELS
    ])
    df_plot = df[df["Monthly"] > 0]
    if df_plot.empty:
        return None
    return px.pie(df_plot, names="Item", values="Monthly", title="生活費の内訳（月額）")


def plot_survivor_phases(rows):
    df = pd.DataFrame(rows)
    df["Label"] = df["phase"] + " (" + df["from_age"].astype(str) + "〜" + df["to_age"].astype(str) + "歳)"
    fig = px.bar(df, x="Label", y="annual", text="types", title="遺族年金の受給イメージ（年額）")
    fig.update_layout(xaxis_title="", yaxis_title="年額 (円)")
    return fig


def plot_survivor_timeline(items):
    df = pd.DataFrame([{"Age": item.age, "Amount": item.amount, "Label": item.label} for item in items])
    fig = px.line(df, x="Age", y="Amount", hover_data=["Label"], markers=True, line_shape="hv",
                  title="年齢別の遺族年金（年額）")
    fig.update_layout(xaxis_title="遺族の年齢", yaxis_title="年額 (円)")
    return fig


def plot_disability_breakdown(result):
    df = pd.DataFrame([
        {"Item": "障害基礎年金", "Annual": result.basic_pension},
        {"Item": "障害厚生年金", "Annual": result.employee_pension - result.spouse_bonus},
        {"Item": "配偶者加給年金", "Annual": result.spouse_bonus},
    ])
    fig = px.bar(df, x="Item", y="Annual", title=f"障害年金 {result.level}級の内訳（年額）", text_auto=",.0f")
    fig.update_traces(textposition="outside")
    return fig


def plot_coverage_steps(segments, salary_monthly, salary_label="現在の月額給料（手取り）"):
    """Stacked step chart: one bar per segment, width = years in the segment."""
    fig = go.Figure()
    if not segments:
        return fig
    for layer in ("pension", "allowances", "gray", "shortfall", "surplus"):
        fig.add_trace(go.Bar(
            x=[(seg["age"] + seg["end_age"]) / 2 for seg in segments],
            width=[seg["end_age"] - seg["age"] for seg in segments],
            y=[seg[layer] for seg in segments],
            name=LAYER_LABELS[layer],
            marker_color=LAYER_COLORS[layer],
            hovertemplate="%{y:,.0f}円/月<extra>" + LAYER_LABELS[layer] + "</extra>",
        ))
    fig.add_hline(y=salary_monthly, line_dash="dash", annotation_text=salary_label)
    fig.update_layout(barmode="stack", bargap=0, xaxis_title="年齢", yaxis_title="月額 (円)")
    return fig


def plot_zone_costs(zone):
    df = zone_frame(zone)
    title = {
        "A": "Aゾーン：保険/貯蓄で備えるリスクの費用感（最大5,000万円）",
        "B": "Bゾーン：貯蓄で対応するリスクの費用感（最大50万円）",
    }[zone]
    fig = px.bar(df, x="Chart Label", y="Cost Estimate", title=title,
                 color_discrete_sequence=["#d9534f" if zone == "A" else "#4a90e2"])
    fig.update_layout(xaxis_title="", yaxis_title="円", yaxis_range=[0, ZONE_CHART_MAX[zone]])
    return fig


def plot_cumulative_risk(current_age=None, current_value=None):
    df = pd.DataFrame({"Age": PROBABILITY_AGES, "Cumulative": PROBABILITY_CUMULATIVE})
    fig = px.line(df, x="Age", y="Cumulative", markers=True, title="累積確率 (%)")
    if current_age is not None:
        fig.add_trace(go.Scatter(x=[current_age], y=[current_value], mode="markers",
                                 marker=dict(size=14, color="#dd7e6b"), name=f"{current_age}歳"))
    fig.update_layout(xaxis_title="年齢", yaxis_title="%")
    return fig


def plot_risk_breakdown():
    return px.pie(names=list(PROBABILITY_BREAKDOWN), values=list(PROBABILITY_BREAKDOWN.values()),
                  hole=0.7, title="リスクの内訳")


def plot_risk_causes():
    df = pd.DataFrame(PROBABILITY_CAUSES).melt(id_vars="Age Group", var_name="Cause", value_name="Share")
    return px.bar(df, x="Age Group", y="Share", color="Cause", title="年代別の主な原因 (%)")


def plot_risk_waterfall():
    steps = waterfall_steps()
    fig = go.Figure(go.Waterfall(
        x=[label for label, _, _ in steps],
        y=[value for _, _, value in steps[:-1]] + [0],
        measure=["relative"] * (len(steps) - 1) + ["total"],
        text=[f"{value}%" for _, _, value in steps],
    ))
    fig.update_layout(title="経済的不能確率の構成（およそ7人に1人の割合）", yaxis_title="%")
    return fig


def plot_board(panels, board_size=BOARD_SIZE, highlight_user=None):
    """Board snapshot: quadrant backgrounds plus one rectangle per panel."""
    width, height = board_size
    fig = go.Figure()
    half_w, half_h = width / 2, height / 2
    quadrant_boxes = {
        "frequent_small": (0, 0, half_w, half_h),
        "frequent_large": (half_w, 0, width, half_h),
        "rare_small": (0, half_h, half_w, height),
        "rare_large": (half_w, half_h, width, height),
    }
    for key, (x0, y0, x1, y1) in quadrant_boxes.items():
        fig.add_shape(type="rect", x0=x0, y0=y0, x1=x1, y1=y1, line_width=0,
                      fillcolor=QUADRANT_COLORS[key], layer="below")
    fig.add_shape(type="line", x0=half_w, y0=0, x1=half_w, y1=height, line=dict(color="#1e40af", width=3))
    fig.add_shape(type="line", x0=0, y0=half_h, x1=width, y1=half_h, line=dict(color="#1e40af", width=3))

    for panel in panels:
        own = highlight_user is None or panel.get("userId") == highlight_user
        fig.add_shape(type="rect", x0=panel["x"], y0=panel["y"],
                      x1=panel["x"] + panel["width"], y1=panel["y"] + panel["height"],
                      line=dict(color="#facc15" if own else "#c084fc", width=2),
                      fillcolor="#fef9c3")
    fig.add_trace(go.Scatter(
        x=[p["x"] + p["width"] / 2 for p in panels],
        y=[p["y"] + p["height"] / 2 for p in panels],
        text=[p["text"] for p in panels],
        customdata=[[p["id"], classify_panel(p, board_size)] for p in panels],
        mode="text",
        hovertemplate="%{text}<br>%{customdata[0]}<extra>%{customdata[1]}</extra>",
        showlegend=False,
    ))
    fig.update_xaxes(range=[0, width], visible=False)
    # screen coordinates: y grows downward
    fig.update_yaxes(range=[height, 0], visible=False)
    fig.update_layout(height=height, margin=dict(l=0, r=0, t=20, b=0),
                      annotations=[
                          dict(x=half_w, y=15, text="よくある", showarrow=False),
                          dict(x=half_w, y=height - 15, text="まれに", showarrow=False),
                          dict(x=40, y=half_h - 15, text="困らない", showarrow=False),
                          dict(x=width - 40, y=half_h - 15, text="困る", showarrow=False),
                      ])
    return fig
