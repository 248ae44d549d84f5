# app/services/access_gate.py
"""
Control de acceso ads-to-unlock.

Decide si un usuario puede reproducir un video o episodio premium según
cuántos anuncios ha visto para ESE mismo contenido. Es una operación de
solo lectura: registrar vistas de anuncios es responsabilidad de
app.services.viewing.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from prometheus_client import Counter
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidRequest, NotFound
from app.core.logging_config import get_access_logger
from app.crud import crud_ad, crud_episode, crud_video
from app.schemas.streaming import CheckAccessResponse

logger = get_access_logger()

ACCESS_DECISIONS_TOTAL = Counter(
    "streaming_access_decisions_total",
    "Decisiones del control de acceso por resultado",
    ["outcome"],
)

FREE_CONTENT_REASON = "Free content"
GRANTED_REASON = "Access granted"


@dataclass(frozen=True)
class ContentRef:
    """
    Referencia a un video o a un episodio, nunca ambos.
    """
    video_id: Optional[int] = None
    episode_id: Optional[int] = None

    @classmethod
    def exactly_one(cls, video_id: Optional[int], episode_id: Optional[int]) -> "ContentRef":
        if (video_id is None) == (episode_id is None):
            raise InvalidRequest(
                "Exactly one of video_id or episode_id is required",
                video_id=video_id, episode_id=episode_id,
            )
        return cls(video_id=video_id, episode_id=episode_id)

    @property
    def is_episode(self) -> bool:
        return self.episode_id is not None


def resolve_content(db: Session, ref: ContentRef) -> Tuple[bool, int]:
    """
    Devuelve (premium efectivo, anuncios requeridos) del contenido referenciado.

    Un episodio es premium si él o su video lo son; el número de anuncios
    requeridos siempre es el del propio episodio.
    """
    if ref.is_episode:
        episode = crud_episode.get_episode_with_video(db, ref.episode_id)
        if episode is None:
            raise NotFound("Episode not found", episode_id=ref.episode_id)
        premium = bool(episode.is_premium) or bool(episode.video.is_premium)
        return premium, episode.ads_to_unlock or 0

    video = crud_video.get_video(db, ref.video_id)
    if video is None:
        raise NotFound("Video not found", video_id=ref.video_id)
    return bool(video.is_premium), video.ads_to_unlock or 0


def decide_access(is_premium: bool, ads_required: int, ads_watched: int) -> CheckAccessResponse:
    """
    Regla de desbloqueo. Pura: no toca la base de datos.
    """
    if not is_premium:
        return CheckAccessResponse(
            can_watch=True, ads_watched=0, ads_required=0, reason=FREE_CONTENT_REASON
        )

    can_watch = ads_watched >= ads_required
    reason = GRANTED_REASON if can_watch else f"Watch {ads_required - ads_watched} more ads to unlock"
    return CheckAccessResponse(
        can_watch=can_watch,
        ads_watched=ads_watched,
        ads_required=ads_required,
        reason=reason,
    )


def check_access(
    db: Session,
    user_identifier: Optional[str],
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> CheckAccessResponse:
    """
    Verifica si user_identifier puede ver el video o episodio indicado.

    - InvalidRequest si falta user_identifier o si no hay exactamente una referencia.
    - NotFound si el contenido no existe.
    - El contenido gratuito no consulta anuncios vistos.
    - Los anuncios se cuentan solo sobre la misma dimensión (video o episodio).
    """
    if not user_identifier:
        raise InvalidRequest("User identifier is required", video_id=video_id, episode_id=episode_id)

    ref = ContentRef.exactly_one(video_id, episode_id)
    is_premium, ads_required = resolve_content(db, ref)

    if not is_premium:
        decision = decide_access(False, 0, 0)
        ACCESS_DECISIONS_TOTAL.labels(outcome="free").inc()
        return decision

    if ref.is_episode:
        ads_watched = crud_ad.count_ad_views(db, user_identifier, episode_id=ref.episode_id)
    else:
        ads_watched = crud_ad.count_ad_views(db, user_identifier, video_id=ref.video_id)

    decision = decide_access(True, ads_required, ads_watched)
    ACCESS_DECISIONS_TOTAL.labels(outcome="granted" if decision.can_watch else "locked").inc()

    logger.info(
        f"Access {'granted' if decision.can_watch else 'locked'}: "
        f"{ads_watched}/{ads_required} ads",
        extra={
            "user_identifier": user_identifier,
            "video_id": ref.video_id,
            "episode_id": ref.episode_id,
        },
    )
    return decision
