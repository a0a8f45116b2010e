"""Fixed trace targets for the fast-trace survey of Chinese backbones."""

from __future__ import annotations

from dataclasses import dataclass

CT163 = "电信 163 AS4134"
CTCN2 = "电信 CN2 AS4809"
CU169 = "联通 169 AS4837"
CU9929 = "联通 A网(CNC) AS9929"
CM = "移动 CMNET AS9808"
CMIN2 = "移动 CMIN2 AS58807"
EDU = "教育网 CERNET AS4538"
CST = "科技网 CSTNET AS7497"


@dataclass(frozen=True)
class ISPTarget:
    """A traceable endpoint inside one ISP's network."""

    isp_name: str
    ip: str
    ipv6: str = ""


@dataclass(frozen=True)
class LocationTargets:
    """The endpoints available in one city."""

    location: str
    ct163: ISPTarget | None = None
    ctcn2: ISPTarget | None = None
    cu169: ISPTarget | None = None
    cu9929: ISPTarget | None = None
    cm: ISPTarget | None = None
    cmin2: ISPTarget | None = None
    edu: ISPTarget | None = None
    cst: ISPTarget | None = None

    def targets(self) -> list[ISPTarget]:
        """The endpoints that exist here, in backbone order."""
        candidates = (
            self.ct163, self.ctcn2, self.cu169, self.cu9929,
            self.cm, self.cmin2, self.edu, self.cst,
        )
        return [target for target in candidates if target is not None]


def _target(name: str, site: str, asn: int, v6: bool = True) -> ISPTarget:
    host = f"{site}-{asn}.endpoint.nxtrace.org."
    return ISPTarget(name, f"ipv4.{host}", f"ipv6.{host}" if v6 else "")


BEIJING = LocationTargets(
    location="北京",
    ct163=_target(CT163, "pek", 4134),
    ctcn2=_target(CTCN2, "pek", 4809, v6=False),
    cu169=_target(CU169, "pek", 4837),
    cu9929=_target(CU9929, "pek", 9929, v6=False),
    cm=_target(CM, "pek", 9808),
    cmin2=_target(CMIN2, "pek", 58807, v6=False),
    edu=_target(EDU, "pek", 4538),
    cst=_target(CST, "pek", 7497),
)

SHANGHAI = LocationTargets(
    location="上海",
    ct163=_target(CT163, "sha", 4134),
    ctcn2=_target(CTCN2, "sha", 4809, v6=False),
    cu169=_target(CU169, "sha", 4837),
    cu9929=_target(CU9929, "sha", 9929),
    cm=_target(CM, "sha", 9808),
    cmin2=_target(CMIN2, "sha", 58807, v6=False),
    edu=_target(EDU, "sha", 4538),
)

GUANGZHOU = LocationTargets(
    location="广州",
    ct163=_target(CT163, "can", 4134),
    ctcn2=_target(CTCN2, "can", 4809, v6=False),
    cu169=_target(CU169, "can", 4837),
    cu9929=_target(CU9929, "can", 9929, v6=False),
    cm=_target(CM, "can", 9808),
    cmin2=_target(CMIN2, "can", 58807, v6=False),
    edu=_target(EDU, "can", 4538),
)

HANGZHOU = LocationTargets(
    location="杭州",
    ct163=_target(CT163, "hgh", 4134),
    cu169=_target(CU169, "hgh", 4837),
    cm=_target(CM, "hgh", 9808),
    edu=_target(EDU, "hgh", 4538),
)

HEFEI = LocationTargets(
    location="合肥",
    edu=_target(EDU, "hfe", 4538),
    cst=_target(CST, "hfe", 7497, v6=False),
)


def all_locations() -> dict[str, LocationTargets]:
    """Every surveyed city, keyed by name."""
    return {
        "beijing": BEIJING,
        "shanghai": SHANGHAI,
        "guangzhou": GUANGZHOU,
        "hangzhou": HANGZHOU,
        "hefei": HEFEI,
    }