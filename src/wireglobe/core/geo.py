"""
どこで: `src/wireglobe/core/geo.py`。
何を: 緯度経度 → 単位球上の直交座標への射影と、大円（距離・補間・到達点）計算を提供する。
なぜ: 描画面（Globe）が扱う全プリミティブを、同一の射影規約から生成するため。

座標規約:
- `x = cos(lat)cos(lng)`, `y = cos(lat)sin(lng)`, `z = -sin(lat)`。
- z 軸は南向き。`Globe.center_on` の回転式はこの符号と対で定義されており、
  中心化した点は視点側の `(0, 0, -1)` に来る。
"""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

GeoPoint = tuple[float, float]
CartesianPoint = tuple[float, float, float]


def deg_to_rad(d: float) -> float:
    """度をラジアンに変換して返す。"""
    return math.pi * float(d) / 180.0


def rad_to_deg(r: float) -> float:
    """ラジアンを度に変換して返す。"""
    return 180.0 * float(r) / math.pi


def _sin(d: float) -> float:
    return math.sin(deg_to_rad(d))


def _cos(d: float) -> float:
    return math.cos(deg_to_rad(d))


def cartesian(lat: float, lng: float) -> CartesianPoint:
    """(lat, lng)[deg] を単位球上の (x, y, z) に射影して返す。

    Notes
    -----
    範囲外の角度も三角関数の周期性でそのまま受け付ける（エラーは無い）。
    """
    x = _cos(lat) * _cos(lng)
    y = _cos(lat) * _sin(lng)
    z = -_sin(lat)
    return x, y, z


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """2 点間の大円距離 [km] を haversine 公式で返す。

    Parameters
    ----------
    lat1, lng1 : float
        始点 [deg]。
    lat2, lng2 : float
        終点 [deg]。

    Returns
    -------
    float
        大円距離 [km]。同一点なら 0、引数の入れ替えに対して対称。
    """
    dlat = float(lat2) - float(lat1)
    dlng = float(lng2) - float(lng1)
    a = _sin(dlat / 2) ** 2 + _cos(lat1) * _cos(lat2) * _sin(dlng / 2) ** 2
    # 丸めで a が 1 をわずかに超えると sqrt(1-a) が NaN になる。
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def intermediate(
    lat1: float, lng1: float, lat2: float, lng2: float, fraction: float
) -> GeoPoint:
    """2 点を結ぶ大円弧上で、始点から fraction の位置にある点を返す。

    Parameters
    ----------
    lat1, lng1, lat2, lng2 : float
        始点・終点 [deg]。
    fraction : float
        0 で始点、1 で終点。

    Returns
    -------
    tuple[float, float]
        補間点 (lat, lng) [deg]。

    Notes
    -----
    球面線形補間（slerp）。2 点が一致すると sin(0) で割ることになり未定義。
    呼び出し側で長さ 0 の区間を除外すること。
    """
    dr = haversine(lat1, lng1, lat2, lng2) / EARTH_RADIUS_KM
    f = float(fraction)
    a = math.sin((1.0 - f) * dr) / math.sin(dr)
    b = math.sin(f * dr) / math.sin(dr)
    x = a * _cos(lat1) * _cos(lng1) + b * _cos(lat2) * _cos(lng2)
    y = a * _cos(lat1) * _sin(lng1) + b * _cos(lat2) * _sin(lng2)
    z = a * _sin(lat1) + b * _sin(lat2)
    phi = math.atan2(z, math.sqrt(x * x + y * y))
    lam = math.atan2(y, x)
    return rad_to_deg(phi), rad_to_deg(lam)


def destination(lat: float, lng: float, distance_km: float, bearing: float) -> GeoPoint:
    """(lat, lng) から方位 bearing[deg] へ distance_km 進んだ点を返す。

    経度は [-180, 180) に正規化する。
    """
    dr = float(distance_km) / EARTH_RADIUS_KM
    phi = math.asin(_sin(lat) * math.cos(dr) + _cos(lat) * math.sin(dr) * _cos(bearing))
    lam = deg_to_rad(lng) + math.atan2(
        _sin(bearing) * math.sin(dr) * _cos(lat),
        math.cos(dr) - _sin(lat) * math.sin(phi),
    )
    return rad_to_deg(phi), math.fmod(rad_to_deg(lam) + 540.0, 360.0) - 180.0


def great_circle_points(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    *,
    max_step_km: float = 500.0,
) -> list[GeoPoint]:
    """大円に沿って 2 点を結ぶ折れ線の頂点列を返す。

    Parameters
    ----------
    lat1, lng1, lat2, lng2 : float
        始点・終点 [deg]。
    max_step_km : float, optional
        1 区間の大円長の上限 [km]。

    Returns
    -------
    list[tuple[float, float]]
        始点・中間点・終点の順の頂点列。区間数は `ceil(d / max_step_km)`。
        終点は補間ではなく引数の値そのもの。距離 0 のときは空リスト。

    Raises
    ------
    ValueError
        max_step_km が正でない場合。
    """
    if float(max_step_km) <= 0.0:
        raise ValueError(f"max_step_km は正の値である必要がある: got={max_step_km!r}")

    d = haversine(lat1, lng1, lat2, lng2)
    if d <= 0.0:
        return []

    n = max(1, math.ceil(d / float(max_step_km)))
    points: list[GeoPoint] = [(float(lat1), float(lng1))]
    # 分率は i/n。終点は引数の値そのもの。
    for i in range(1, n):
        points.append(intermediate(lat1, lng1, lat2, lng2, i / n))
    points.append((float(lat2), float(lng2)))
    return points


__all__ = [
    "EARTH_RADIUS_KM",
    "CartesianPoint",
    "GeoPoint",
    "cartesian",
    "deg_to_rad",
    "destination",
    "great_circle_points",
    "haversine",
    "intermediate",
    "rad_to_deg",
]
