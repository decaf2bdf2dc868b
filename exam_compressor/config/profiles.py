from dataclasses import dataclass

DEFAULT_ACCEPTED_FORMATS = ".jpg, .jpeg, .png, .pdf"


@dataclass(frozen=True)
class ExamProfile:
    """Compression knobs applied to every file of one upload batch."""

    max_image_size_kb: int
    max_doc_size_kb: int
    image_quality: int  # 0-100
    pdf_compression_level: int  # 0-9

    def __post_init__(self) -> None:
        if self.max_image_size_kb <= 0 or self.max_doc_size_kb <= 0:
            raise ValueError("Profile size limits must be positive")
        if not 0 <= self.image_quality <= 100:
            raise ValueError(f"image_quality out of range: {self.image_quality}")
        if not 0 <= self.pdf_compression_level <= 9:
            raise ValueError(
                f"pdf_compression_level out of range: {self.pdf_compression_level}"
            )


@dataclass(frozen=True)
class ExamProfileInfo:
    """Catalogue entry describing an exam profile to clients."""

    token: str
    title: str
    description: str
    accepted_formats: str
    profile: ExamProfile


DEFAULT_PROFILE = ExamProfile(
    max_image_size_kb=100,
    max_doc_size_kb=500,
    image_quality=75,
    pdf_compression_level=8,
)

PROFILES: dict[str, ExamProfileInfo] = {
    "upsc": ExamProfileInfo(
        token="upsc",
        title="UPSC Civil Services",
        description="Compress files for UPSC application portals with strict size limits.",
        accepted_formats=".jpg, .jpeg, .png, .pdf, .doc, .docx",
        profile=ExamProfile(200, 1024, 85, 7),
    ),
    "gate": ExamProfileInfo(
        token="gate",
        title="GATE",
        description="Optimize documents and images for GATE application uploads.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(100, 500, 75, 8),
    ),
    "cat": ExamProfileInfo(
        token="cat",
        title="CAT MBA Entrance",
        description="Format your CAT application documents to required specifications.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(150, 800, 80, 7),
    ),
    "neet": ExamProfileInfo(
        token="neet",
        title="NEET Medical",
        description="Prepare medical entrance exam documents with proper compression.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(200, 1024, 85, 7),
    ),
    "jee": ExamProfileInfo(
        token="jee",
        title="JEE Engineering",
        description="Compress files for JEE Main and Advanced applications.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(100, 500, 75, 8),
    ),
    "bank": ExamProfileInfo(
        token="bank",
        title="Bank Exams",
        description="Optimize documents for banking exam applications.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(50, 500, 70, 9),
    ),
    "ssc": ExamProfileInfo(
        token="ssc",
        title="SSC Exams",
        description="Format files according to Staff Selection Commission requirements.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(100, 500, 75, 8),
    ),
    "defence": ExamProfileInfo(
        token="defence",
        title="Defence Exams",
        description="Compress documents for various defence services examination applications.",
        accepted_formats=DEFAULT_ACCEPTED_FORMATS,
        profile=ExamProfile(150, 700, 80, 7),
    ),
}


def resolve_profile(exam_type: str | None) -> ExamProfile:
    """Return the profile for an exam token; unknown tokens get the default."""
    token = (exam_type or "").strip().lower()
    info = PROFILES.get(token)
    if info is None:
        return DEFAULT_PROFILE
    return info.profile
