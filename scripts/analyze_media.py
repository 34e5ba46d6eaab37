"""
로컬 이미지/클립 1개를 자세 분석 서비스에 돌려보는 CLI

예)
  python -m scripts.analyze_media --file samples/squat.jpg --activity squat
  python -m scripts.analyze_media --file samples/desk.webm --activity desk_sitting --mode clip --provider gateway
"""
import argparse, asyncio, json, logging, sys
from pathlib import Path

from app.common.errors import PostureAnalysisError
from app.domain.media.encoder import encode_file
from app.schemas.analysis_dto import Activity, MediaMode
from app.services.result_view import AnalysisView, render_error, render_result
from app.services.service_factory import create_posture_analysis_service

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Image/clip -> posture analysis")
    ap.add_argument("--file", required=True, type=Path, help="분석할 이미지 또는 비디오 파일")
    ap.add_argument("--activity", required=True, choices=[a.value for a in Activity])
    ap.add_argument("--mode", default=None, choices=[m.value for m in MediaMode],
                    help="frame | clip (없으면 MIME 타입으로 결정)")
    ap.add_argument("--mime", default=None, help="MIME 타입 (없으면 확장자로 추정)")
    ap.add_argument("--provider", default=None, help="noop | openai | gateway")
    ap.add_argument("--model", default=None)
    ap.add_argument("--json", action="store_true", help="결과를 JSON으로 출력")
    return ap.parse_args(argv)


def guess_mode(media: str) -> MediaMode:
    return MediaMode.clip if media.startswith(MediaMode.clip.data_uri_prefix) else MediaMode.frame


async def run(args) -> int:
    try:
        service = create_posture_analysis_service(llm_provider=args.provider, llm_model=args.model)
    except ValueError as e:
        # 설정 오류(provider/API key 등)는 그대로 보여준다
        _print_view(AnalysisView(status="error", title="Configuration Error", message=str(e)), args.json)
        return 1

    try:
        media = encode_file(args.file, args.mime)
        mode = MediaMode(args.mode) if args.mode else guess_mode(media)
        result = await service.analyze(media, args.activity, mode)
    except PostureAnalysisError as e:
        _print_view(render_error(e), args.json)
        return 1
    except Exception as e:
        logger.error(f"❌ 분석 실패: {e}", exc_info=True)
        _print_view(render_error(e), args.json)
        return 1

    if args.json:
        print(json.dumps({"postureAnalysis": result.model_dump(by_alias=True)}, ensure_ascii=False))
    else:
        _print_view(render_result(result), False)
    return 0


def _print_view(view: AnalysisView, as_json: bool) -> None:
    print(json.dumps(view.to_dict(), ensure_ascii=False) if as_json else f"[{view.title}] {view.message}")


def main(argv=None) -> int:
    logging.basicConfig(level=logging.WARNING)
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
