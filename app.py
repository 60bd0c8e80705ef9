"""
Web application for the Inverted Pendulum simulation

Interactive dashboard that drives the simulator from sliders and buttons and
draws the cart, rod and a fading trail of the bob on every tick.

The page holds one shared simulation, so every open tab sees and drives the
same cart. Callbacks may run on several server threads at once; they reach the
simulator only through the SimulationLoop lock, and nudges are queued and
applied at the next tick. The arrow-key nudges of the browser version are the
two Nudge buttons here.
"""

from collections import deque
from typing import Any, Deque, List, Tuple
import logging

import dash
from dash import dcc, html, Input, Output
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.graph_objs as go

from pendulum import (
    ConfigurationError,
    ControlMode,
    ManualOverride,
    PendulumSimulator,
    SimulationLoop,
    SetGain,
    SetMode,
    Snapshot,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

CANVAS_HEIGHT = 400.0  # px
TRAIL_LENGTH = 60  # bob positions kept for the fading trail

simulator = PendulumSimulator()
loop = SimulationLoop(simulator)
params = simulator.params
trail: Deque[Tuple[float, float]] = deque(maxlen=TRAIL_LENGTH)

SLIDER_GAINS = {
    "convergence-rate-slider": "convergence_rate",
    "kp-slider": "kp",
    "ki-slider": "ki",
    "kd-slider": "kd",
}


def bob_position(snapshot: Snapshot) -> Tuple[float, float]:
    """
    Bob coordinates in canvas space (y grows downward)

    Args:
        snapshot: Simulator snapshot

    Returns:
        Tuple of (bob_x, bob_y) in px
    """
    pivot_y = CANVAS_HEIGHT / 2
    bob_x = snapshot.cart_position + params.rod_length * np.sin(snapshot.angle)
    bob_y = pivot_y - params.rod_length * np.cos(snapshot.angle)
    return float(bob_x), float(bob_y)


def labelled_slider(label: str, slider_id: str, min_value: float, max_value: float,
                    step: float, value: float) -> html.Div:
    return html.Div([
        html.Label(label, style={'fontWeight': 'bold', 'marginBottom': '5px'}),
        dcc.Slider(
            id=slider_id,
            min=min_value,
            max=max_value,
            step=step,
            value=value,
            marks=None,
            tooltip={"placement": "bottom", "always_visible": True},
        ),
    ], style={'width': '22%', 'display': 'inline-block', 'marginRight': '3%'})


button_style = {'padding': '10px 20px', 'fontSize': '16px', 'marginRight': '10px',
                'backgroundColor': '#4CAF50', 'color': 'white', 'border': 'none',
                'borderRadius': '5px', 'cursor': 'pointer'}


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Inverted Pendulum"

# Slider defaults times the default convergence rate give the default gains
app.layout = html.Div([
    html.Div([
        html.H1("Inverted Pendulum on a Cart",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            labelled_slider("Convergence Rate", "convergence-rate-slider", 0.1, 10.0, 0.1,
                            simulator.gains.convergence_rate),
            labelled_slider("Kp", "kp-slider", 0.0, 20.0, 0.5, 10.0),
            labelled_slider("Ki", "ki-slider", 0.0, 1.0, 0.05, 0.2),
            labelled_slider("Kd", "kd-slider", 0.0, 2.0, 0.1, 1.0),
        ], style={'marginBottom': '20px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div([
            dcc.RadioItems(
                id='mode-radio',
                options=[{'label': 'PID', 'value': ControlMode.PID.value},
                         {'label': 'PD', 'value': ControlMode.PD.value}],
                value=ControlMode.PID.value,
                inline=True,
                style={'display': 'inline-block', 'marginRight': '30px'},
            ),
            html.Button('Start', id='start-button', style=button_style),
            html.Button('Pause', id='pause-button', style=button_style),
            html.Button('Reset', id='reset-button', style=button_style),
            html.Button('◀ Nudge', id='nudge-left-button', style=button_style),
            html.Button('Nudge ▶', id='nudge-right-button', style=button_style),
        ], style={'marginBottom': '20px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Graph(id='pendulum-graph', config={'displayModeBar': False}),
        dcc.Interval(id='tick', interval=int(params.dt * 1000), disabled=True),
    ], style={'maxWidth': '1000px', 'margin': '0 auto', 'padding': '20px'})
])


@app.callback(
    Output("tick", "disabled"),
    [Input("start-button", "n_clicks"), Input("pause-button", "n_clicks"),
     Input("reset-button", "n_clicks")],
    prevent_initial_call=True,
)
def control_run_state(start_clicks: int | None, pause_clicks: int | None,
                      reset_clicks: int | None) -> bool:
    """Start enables the tick interval; Pause and Reset disable it"""
    return dash.ctx.triggered_id != "start-button"


@app.callback(
    [Output("status-message", "children"), Output("ki-slider", "disabled")],
    [Input(slider_id, "value") for slider_id in SLIDER_GAINS] + [Input("mode-radio", "value")],
    prevent_initial_call=True,
)
def update_configuration(*values: Any) -> tuple[Any, bool]:
    """Forward the slider or mode change that fired as a single command"""
    triggered = dash.ctx.triggered_id
    if triggered is None:
        raise PreventUpdate

    mode_value = values[-1]
    try:
        if triggered == "mode-radio":
            loop.apply_now(SetMode(ControlMode(mode_value)))
        else:
            value = dict(zip(SLIDER_GAINS, values))[triggered]
            loop.apply_now(SetGain(SLIDER_GAINS[triggered], float(value)))
    except ConfigurationError as e:
        return html.Div(f"Error: {e}", style={"color": "red"}), mode_value == ControlMode.PD.value

    with loop.lock:
        gains = simulator.gains
        text = (
            f"Kp = {gains.kp:.2f}, Ki = {gains.ki:.2f}, Kd = {gains.kd:.2f}, "
            f"convergence rate = {gains.convergence_rate:.1f} ({simulator.mode.value.upper()})"
        )
    message = html.Div(
        text,
        style={"color": "green"},
    )
    return message, mode_value == ControlMode.PD.value


@app.callback(
    Output("pendulum-graph", "figure"),
    [Input("tick", "n_intervals"), Input("reset-button", "n_clicks"),
     Input("nudge-left-button", "n_clicks"), Input("nudge-right-button", "n_clicks")],
)
def advance(n_intervals: int | None, reset_clicks: int | None,
            left_clicks: int | None, right_clicks: int | None) -> go.Figure:
    """Advance one tick, or apply a reset/nudge, and redraw"""
    triggered = dash.ctx.triggered_id

    if triggered == "nudge-left-button":
        loop.submit(ManualOverride(-params.nudge_step))
    elif triggered == "nudge-right-button":
        loop.submit(ManualOverride(params.nudge_step))

    with loop.lock:
        if triggered == "tick":
            snapshot = loop.tick()
            trail.append(bob_position(snapshot))
        elif triggered == "reset-button":
            snapshot = loop.reset()
            trail.clear()
        else:
            snapshot = loop.snapshot()
        trail_points = list(trail)

    return create_pendulum_figure(snapshot, trail_points)


def create_pendulum_figure(snapshot: Snapshot, trail_points: List[Tuple[float, float]]) -> go.Figure:
    """Draw track, cart, rod, bob and the fading bob trail"""
    pivot_x = snapshot.cart_position
    pivot_y = CANVAS_HEIGHT / 2
    bob_x, bob_y = bob_position(snapshot)

    fig = go.Figure()

    if trail_points:
        trail_x, trail_y = zip(*trail_points)
        fig.add_trace(
            go.Scatter(
                x=trail_x,
                y=trail_y,
                mode="markers",
                marker=dict(color="#ff6347", size=6,
                            opacity=np.linspace(0.05, 0.5, len(trail_points)).tolist()),
                hoverinfo="skip",
            )
        )

    fig.add_trace(
        go.Scatter(
            x=[pivot_x, bob_x],
            y=[pivot_y, bob_y],
            mode="lines",
            line=dict(color="#000", width=4),
            hoverinfo="skip",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[bob_x],
            y=[bob_y],
            mode="markers",
            marker=dict(color="#ff6347", size=20),
            hovertemplate="Bob: (%{x:.1f}, %{y:.1f})<extra></extra>",
        )
    )

    cart_color = "#f44336" if snapshot.at_edge else "#4CAF50"
    fig.add_shape(
        type="rect",
        x0=pivot_x - params.cart_width / 2,
        x1=pivot_x + params.cart_width / 2,
        y0=pivot_y - params.cart_height / 2,
        y1=pivot_y + params.cart_height / 2,
        fillcolor=cart_color,
        line=dict(width=0),
        layer="below",
    )

    direction = "→" if snapshot.drive_direction > 0 else "←"
    fig.update_layout(
        title=f"θ = {snapshot.angle:.3f} rad   drive {direction}"
              f"{'   (at edge)' if snapshot.at_edge else ''}",
        xaxis=dict(range=[0, params.track_width], showgrid=False, zeroline=False),
        # Canvas coordinates: y grows downward
        yaxis=dict(range=[CANVAS_HEIGHT, 0], showgrid=False, zeroline=False,
                   scaleanchor="x", scaleratio=1),
        showlegend=False,
        height=450,
        template="plotly_white",
        margin=dict(l=20, r=20, t=50, b=20),
    )
    return fig


if __name__ == "__main__":
    app.run(debug=True, port=8050)
