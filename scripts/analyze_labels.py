#!/usr/bin/env python3
"""
Label Performance CLI
JSON으로 내보낸 콘텐츠 목록에서 해시태그/키워드 성과 분석

Usage:
    python scripts/analyze_labels.py analyze videos.json --mode hashtag --top-n 10
    python scripts/analyze_labels.py recommend videos.json --mode keyword
"""

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from app.data_pipeline.domain.models import LabelMode, PlatformType
from app.services.analysis import build_recommendation, compute_label_performance

app = typer.Typer()
console = Console()


def _load_items(path: Path) -> List[Any]:
    """JSON 파일 로드 (리스트 또는 {"items": [...]})"""
    if not path.exists():
        console.print(f"[red]❌ 파일을 찾을 수 없습니다: {path}[/red]")
        raise typer.Exit(code=1)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]❌ JSON 파싱 오류: {e}[/red]")
        raise typer.Exit(code=1)

    if isinstance(data, dict):
        data = data.get("items", [])
    return data


def _platform_for(mode: LabelMode) -> PlatformType:
    return PlatformType.TIKTOK if mode == LabelMode.HASHTAG else PlatformType.YOUTUBE


@app.command()
def analyze(
    file: Path,
    mode: LabelMode = LabelMode.HASHTAG,
    top_n: Optional[int] = None,
    as_json: bool = typer.Option(False, "--json", help="JSON 출력"),
):
    """
    라벨 성과 표 출력

    Args:
        file: 콘텐츠 목록 JSON
        mode: hashtag / keyword
        top_n: 최대 라벨 수 (없으면 모드별 기본값)
        as_json: JSON으로 출력
    """
    items = _load_items(file)

    try:
        result = compute_label_performance(items, mode, top_n)
    except (TypeError, ValueError) as e:
        console.print(f"[red]❌ 분석 실패: {e}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(enriched=True), ensure_ascii=False, indent=2))
        return

    console.print(f"\n📊 [bold cyan]Label Performance ({mode.value})[/bold cyan]")
    console.print(f"Items: {len(items)}  |  Overall average views: {result.overall_average_views}\n")

    if result.is_empty:
        console.print("[yellow]⚠️ 분석할 라벨이 없습니다.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Label", style="cyan")
    table.add_column("Lift", justify="right")
    table.add_column("Uses", justify="right")
    table.add_column("Total Views", justify="right")
    table.add_column("Avg Views", justify="right")

    for rank, record in enumerate(result.labels, 1):
        lift_style = "green" if record.lift >= 1 else "red"
        table.add_row(
            str(rank),
            record.label,
            f"[{lift_style}]{record.lift:.2f}x[/{lift_style}]",
            str(record.usage_count),
            f"{record.total_views:,}",
            f"{record.average_views:,}",
        )

    console.print(table)


@app.command()
def recommend(
    file: Path,
    mode: LabelMode = LabelMode.HASHTAG,
    brand_tag: Optional[str] = None,
):
    """
    5슬롯 해시태그 추천 출력

    Args:
        file: 콘텐츠 목록 JSON
        mode: hashtag (TikTok) / keyword (YouTube)
        brand_tag: TikTok 브랜드 태그 (기본 #velvetorionx)
    """
    items = _load_items(file)

    try:
        result = compute_label_performance(items, mode)
    except (TypeError, ValueError) as e:
        console.print(f"[red]❌ 분석 실패: {e}[/red]")
        raise typer.Exit(code=1)

    recommendation = build_recommendation(result.labels, _platform_for(mode), brand_tag=brand_tag)

    console.print(f"\n🏷️  [bold cyan]Recommended tags ({recommendation.platform.value})[/bold cyan]\n")
    console.print("  " + " ".join(f"[green]{tag}[/green]" for tag in recommendation.tags))
    console.print(f"\n[dim]{recommendation.explanation}[/dim]\n")


if __name__ == "__main__":
    app()
