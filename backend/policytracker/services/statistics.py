from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Sequence, Union

DateLike = Union[date, datetime]

# |delta| がこれ未満なら局所回帰を諦めて加重平均にする
COLLINEAR_EPS = 1e-9


@dataclass(frozen=True)
class ScoredEvent:
    """1件の政策スコア（日付・値・重要度ウェイト）。"""

    date: DateLike
    value: float
    weight: float


@dataclass(frozen=True)
class AveragePoint:
    date: DateLike
    score: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    w: float


@dataclass(frozen=True)
class SmoothedPoint:
    x: float
    y: float


def cumulative_weighted_average(events: Iterable[ScoredEvent]) -> List[AveragePoint]:
    """日付順に並べた各時点までの累積加重平均を返す。

    入力は並べ替え済みである必要はない（コピーを安定ソートする）。
    ウェイト合計が0の時点は NaN ではなく 0 を出す。
    """

    ordered = sorted(events, key=lambda e: e.date)

    score_weight_sum = 0.0
    weight_sum = 0.0
    out: List[AveragePoint] = []
    for ev in ordered:
        score_weight_sum += ev.value * ev.weight
        weight_sum += ev.weight
        score = 0.0 if weight_sum == 0 else score_weight_sum / weight_sum
        out.append(AveragePoint(date=ev.date, score=score))
    return out


def tricube(u: float) -> float:
    a = abs(u)
    if a >= 1:
        return 0.0
    return (1 - a**3) ** 3


def _kth_nearest_distance(xs: Sequence[float], i: int, k: int) -> float:
    """ソート済み xs 上で xs[i] から k 番目（0始まり、自身が0番目）に近い点までの距離。

    左右に広げながら距離の小さい方を順に取るので、全距離をソートした場合と同じ値になる。
    """

    xi = xs[i]
    n = len(xs)
    left = i - 1
    right = i + 1
    dist = 0.0
    for _ in range(min(k, n - 1)):
        if left < 0:
            dist = xs[right] - xi
            right += 1
        elif right >= n:
            dist = xi - xs[left]
            left -= 1
        else:
            dl = xi - xs[left]
            dr = xs[right] - xi
            if dl <= dr:
                dist = dl
                left -= 1
            else:
                dist = dr
                right += 1
    return dist


def weighted_loess(points: Iterable[Point], bandwidth: float = 0.25) -> List[SmoothedPoint]:
    """重要度ウェイト付きLOESS（局所線形回帰 + tricubeカーネル）。

    - 各点 xi について、k = floor(bandwidth * n) 番目に近い点までの距離を窓幅とする
    - カーネル重み tricube(|xj - xi| / 窓幅) に呼び出し側のウェイト w を掛けて回帰する
    - 窓幅0のときは分母を1にし、退化（|delta| < 1e-9）したときは加重平均に落とす
    - 出力は x 昇順で、入力と同じ件数

    計算量は O(n^2)。数百件規模を想定しており、それ以上では使い方を見直すこと。
    x / y / w は有限値であることが前提（検査しない）。
    """

    if not (0 < bandwidth <= 1):
        raise ValueError(f"bandwidth must be in (0, 1], got {bandwidth!r}")

    ordered = sorted(points, key=lambda p: p.x)
    n = len(ordered)
    if n == 0:
        return []

    xs = [p.x for p in ordered]
    ys = [p.y for p in ordered]
    ws = [p.w for p in ordered]

    k = int(bandwidth * n)

    smoothed: List[SmoothedPoint] = []
    for i in range(n):
        xi = xs[i]
        max_dist = _kth_nearest_distance(xs, i, k)
        denom = max_dist if max_dist > 0 else 1.0

        sw = swx = swy = swxx = swxy = 0.0
        for xj, yj, wj in zip(xs, ys, ws):
            combined = tricube(abs(xj - xi) / denom) * wj
            if combined <= 0:
                continue
            # xi を原点にした座標で足し込む（エポック秒でも桁落ちしない）
            dx = xj - xi
            sw += combined
            swx += combined * dx
            swy += combined * yj
            swxx += combined * dx * dx
            swxy += combined * dx * yj

        delta = sw * swxx - swx * swx
        if abs(delta) < COLLINEAR_EPS:
            y_hat = swy / sw if sw > 0 else 0.0
        else:
            beta1 = (sw * swxy - swx * swy) / delta
            # 原点が xi なので切片がそのまま xi での推定値
            y_hat = (swy - beta1 * swx) / sw

        smoothed.append(SmoothedPoint(x=xi, y=y_hat))
    return smoothed
