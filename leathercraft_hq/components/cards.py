"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from leathercraft_hq.theme import *
from leathercraft_hq.errors import describe_error


def section(title, children, color=AMBER, action=None):
    """Titled section card with colored top border and an optional header button."""
    header = [html.Span(title)]
    if action is not None:
        header.append(html.Div(action, className="ms-auto"))
    return dbc.Card([
        dbc.CardHeader(header, style={"color": color, "fontWeight": "bold", "fontSize": "16px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "12px 16px",
                                      "display": "flex", "alignItems": "center"}),
        dbc.CardBody(children, style={"padding": "16px"}),
    ], className="mb-3")


def make_chart(fig, height=360, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def empty_state(text):
    return html.P(text, style={"color": GRAY, "textAlign": "center", "padding": "40px"})


def toast(message, header="Saved", icon="success"):
    return dbc.Toast(
        message,
        header=header,
        icon=icon,
        duration=4000,
        dismissable=True,
        style=TOAST_STYLE,
    )


def error_toast(error, header="Could not save"):
    return toast(str(error), header=header, icon="danger")


def collection_alerts(errors):
    """One warning per collection whose live feed is failing."""
    alerts = []
    for collection, error in sorted(errors.items()):
        display = describe_error(error)
        alerts.append(dbc.Alert([
            html.Strong(f"{collection.title()}: {display.title}. "),
            html.Span(display.message),
        ], color="warning", className="mb-2"))
    return alerts


def error_screen(error):
    """Full-page blocking error with the fix-it steps."""
    display = describe_error(error)
    body = [
        html.H3(display.title, style={"color": RED}),
        html.P(display.message, style={"color": GRAY}),
    ]
    if display.steps:
        body.append(html.H6("How to fix", style={"color": AMBER, "marginTop": "16px"}))
        body.append(html.Ol([html.Li(step) for step in display.steps]))
    body.append(html.P(f"Details: {error}", style={"color": DARKGRAY, "fontSize": "11px",
                                                     "marginTop": "16px"}))
    return dbc.Card(dbc.CardBody(body), className="error-screen",
                    style={"borderTop": f"3px solid {RED}"})
