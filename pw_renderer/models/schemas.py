"""
Pydantic Models and Schemas
===========================

Renderer configuration supplied once by the host, and the per-call render job.
Both accept the host's camelCase keys as well as the snake_case field names.
"""

from typing import Optional, List, Dict, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


BrowserType = Literal["chromium", "firefox", "webkit"]
ImageType = Literal["jpeg", "png"]


class RendererConfig(BaseModel):
    """Browser launch configuration. Immutable once constructed."""

    browser_type: BrowserType = Field("chromium", alias="browserType", description="Engine name")
    headless: bool = Field(True, description="Run the browser without a window")
    args: List[str] = Field(default_factory=list, description="Extra launch arguments")
    executable_path: Optional[str] = Field(
        None, alias="executablePath", description="Override browser binary path"
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def launch_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``BrowserType.launch``."""
        options: Dict[str, Any] = {"headless": self.headless, "args": list(self.args)}
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options


class RenderJob(BaseModel):
    """Options of a single render call. Unknown keys are template data."""

    tpl_file: str = Field(..., alias="tplFile", min_length=1, description="Template file path")
    save_id: Optional[str] = Field(None, alias="saveId", description="Output HTML file stem")
    img_type: ImageType = Field("jpeg", alias="imgType", description="Screenshot format")
    quality: int = Field(90, ge=0, le=100, description="JPEG quality")
    omit_background: bool = Field(
        False, alias="omitBackground", description="Hide the default white background"
    )
    path: Optional[str] = Field(None, description="Also save the screenshot to this path")
    multi_page: bool = Field(False, alias="multiPage", description="Paginate tall content")
    multi_page_height: Optional[int] = Field(
        None, alias="multiPageHeight", gt=0, description="Page slice height in pixels"
    )
    page_goto_params: Dict[str, Any] = Field(
        default_factory=dict, alias="pageGotoParams", description="Extra page.goto arguments"
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("multi_page_height", mode="before")
    @classmethod
    def unset_zero_page_height(cls, v: Any) -> Any:
        """Treat 0 or an empty value as unset so the default page height applies."""
        return v or None

    def screenshot_options(self) -> "ScreenshotOptions":
        """Build the screenshot options for this job."""
        return ScreenshotOptions(
            type="jpeg" if self.multi_page else self.img_type,
            omit_background=self.omit_background,
            quality=None if self.img_type == "png" else self.quality,
            path=self.path or None,
        )


class ScreenshotOptions(BaseModel):
    """Arguments passed to Playwright's ``screenshot`` calls."""

    type: ImageType = "jpeg"
    omit_background: bool = False
    quality: Optional[int] = Field(None, ge=0, le=100)
    path: Optional[str] = None

    def as_kwargs(self) -> Dict[str, Any]:
        """Drop unset options so Playwright applies its own defaults."""
        return self.model_dump(exclude_none=True)
