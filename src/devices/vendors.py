"""
Static vendor table.

vendor -> {name, packages: {package id -> display name},
           families: {family id -> {name, architecture, devices}}}

``device`` is the device code the place-and-route tool expects.
"""

from typing import Any, Dict, Final

_ECP5_SMALL = ["caBGA256", "caBGA381", "csfBGA285", "TQFP144"]
_ECP5_UM = ["caBGA381", "caBGA554", "csfBGA285"]
_ECP5_LARGE = ["caBGA381", "caBGA554", "caBGA756", "csfBGA285"]

VENDOR_DATA: Final[Dict[str, Dict[str, Any]]] = {
    "lattice": {
        "name": "Lattice",
        "packages": {
            # ECP5
            "caBGA256": "caBGA256",
            "caBGA381": "caBGA381",
            "caBGA554": "caBGA554",
            "caBGA756": "caBGA756",
            "csfBGA285": "csfBGA285",
            "TQFP144": "TQFP144",
            # iCE40
            "sg48": "SG48",
            "uwg30": "UWG30",
            "qn32": "QN32",
            "qn84": "QN84",
            "cm36": "CM36",
            "cm49": "CM49",
            "cm81": "CM81",
            "cm121": "CM121",
            "cm225": "CM225",
            "cb81": "CB81",
            "cb121": "CB121",
            "cb132": "CB132",
            "bg121": "BG121",
            "ct256": "CT256",
            "vq100": "VQ100",
            "tq144": "TQ144",
            # Nexus
            "WLCSP72": "WLCSP72",
            "WLCSP84": "WLCSP84",
            "QFN72": "QFN72",
            "csfBGA121": "csfBGA121",
            "csfBGA289": "csfBGA289",
            "caBGA400": "caBGA400",
        },
        "families": {
            "ecp5": {
                "name": "ECP5",
                "architecture": "ecp5",
                "devices": {
                    "lfe5u-12": {"name": "LFE5U-12", "device": "12k", "packages": _ECP5_SMALL},
                    "lfe5u-25": {"name": "LFE5U-25", "device": "25k", "packages": _ECP5_SMALL},
                    "lfe5u-45": {
                        "name": "LFE5U-45",
                        "device": "45k",
                        "packages": _ECP5_SMALL + ["caBGA554"],
                    },
                    "lfe5u-85": {"name": "LFE5U-85", "device": "85k", "packages": _ECP5_LARGE},
                    "lfe5um-25": {
                        "name": "LFE5UM-25",
                        "device": "um-25k",
                        "packages": ["caBGA381", "csfBGA285"],
                    },
                    "lfe5um-45": {"name": "LFE5UM-45", "device": "um-45k", "packages": _ECP5_UM},
                    "lfe5um-85": {"name": "LFE5UM-85", "device": "um-85k", "packages": _ECP5_LARGE},
                    "lfe5um5g-25": {
                        "name": "LFE5UM5G-25",
                        "device": "um5g-25k",
                        "packages": ["caBGA381", "csfBGA285"],
                    },
                    "lfe5um5g-45": {
                        "name": "LFE5UM5G-45",
                        "device": "um5g-45k",
                        "packages": _ECP5_UM,
                    },
                    "lfe5um5g-85": {
                        "name": "LFE5UM5G-85",
                        "device": "um5g-85k",
                        "packages": _ECP5_LARGE,
                    },
                },
            },
            "ice40": {
                "name": "iCE40",
                "architecture": "ice40",
                "devices": {
                    "ice40lp384": {
                        "name": "iCE40 LP384",
                        "device": "lp384",
                        "packages": ["qn32", "cm36", "cm49"],
                    },
                    "ice40lp1k": {
                        "name": "iCE40 LP1K",
                        "device": "lp1k",
                        "packages": ["qn84", "cm36", "cm49", "cm81", "cm121", "cb81", "cb121"],
                    },
                    "ice40lp4k": {
                        "name": "iCE40 LP4K",
                        "device": "lp4k",
                        "packages": ["cm81", "cm121", "cm225"],
                    },
                    "ice40lp8k": {
                        "name": "iCE40 LP8K",
                        "device": "lp8k",
                        "packages": ["cm81", "cm121", "cm225"],
                    },
                    "ice40hx1k": {
                        "name": "iCE40 HX1K",
                        "device": "hx1k",
                        "packages": ["vq100", "cb132", "tq144"],
                    },
                    "ice40hx4k": {
                        "name": "iCE40 HX4K",
                        "device": "hx4k",
                        "packages": ["bg121", "cb132", "tq144"],
                    },
                    "ice40hx8k": {
                        "name": "iCE40 HX8K",
                        "device": "hx8k",
                        "packages": ["bg121", "cb132", "cm225", "ct256"],
                    },
                    "ice40up3k": {
                        "name": "iCE40 UP3K",
                        "device": "up3k",
                        "packages": ["sg48", "uwg30"],
                    },
                    "ice40up5k": {
                        "name": "iCE40 UP5K",
                        "device": "up5k",
                        "packages": ["sg48", "uwg30"],
                    },
                    "ice40u4k": {
                        "name": "iCE40 U4K",
                        "device": "u4k",
                        "packages": ["sg48"],
                    },
                },
            },
            "nexus": {
                "name": "Nexus",
                "architecture": "nexus",
                "devices": {
                    "lifcl-17": {
                        "name": "LIFCL-17",
                        "device": "LIFCL-17",
                        "packages": ["WLCSP72", "QFN72", "csfBGA121", "caBGA256"],
                    },
                    "lifcl-40": {
                        "name": "LIFCL-40",
                        "device": "LIFCL-40",
                        "packages": ["QFN72", "csfBGA121", "caBGA256", "csfBGA289", "caBGA400"],
                    },
                    # Listed for completeness; nextpnr has no package mapping for it.
                    "lifcl-33": {
                        "name": "LIFCL-33",
                        "device": "LIFCL-33",
                        "packages": ["WLCSP84"],
                    },
                },
            },
        },
    },
    "gowin": {
        "name": "Gowin",
        "packages": {
            "CS30": "CS30",
            "QN32": "QN32",
            "QN48": "QN48",
            "QN88": "QN88",
            "LQ100": "LQ100",
            "LQ144": "LQ144",
            "MG160": "MG160",
            "UG169": "UG169",
        },
        "families": {
            "gw1n": {
                "name": "GW1N",
                "architecture": "gowin",
                "devices": {
                    "gw1n-1": {
                        "name": "GW1N-1",
                        "device": "GW1N-1",
                        "packages": ["CS30", "QN32", "QN48", "LQ100", "LQ144"],
                    },
                    "gw1n-4": {
                        "name": "GW1N-4",
                        "device": "GW1N-4",
                        "packages": ["QN32", "QN48", "QN88", "LQ100", "LQ144", "MG160"],
                    },
                    "gw1n-9": {
                        "name": "GW1N-9",
                        "device": "GW1N-9",
                        "packages": ["QN48", "QN88", "LQ100", "LQ144", "UG169"],
                    },
                },
            },
            "gw1nr": {
                "name": "GW1NR",
                "architecture": "gowin",
                "devices": {
                    "gw1nr-9": {
                        "name": "GW1NR-9",
                        "device": "GW1NR-9",
                        "packages": ["QN88", "LQ144"],
                    },
                },
            },
        },
    },
    "generic": {
        "name": "Generic",
        "packages": {"generic": "Generic"},
        "families": {
            "generic": {
                "name": "Generic",
                "architecture": "generic",
                "devices": {
                    "generic": {"name": "Generic", "device": "generic", "packages": ["generic"]},
                },
            },
        },
    },
}
