from skillpath.models.roadmap_progress import RoadmapProgress

__all__ = [
	"RoadmapProgress",
]
