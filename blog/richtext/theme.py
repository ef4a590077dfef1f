"""CSS classes emitted by the serializer (Tailwind utility classes)."""

from __future__ import annotations

from typing import Dict

PARAGRAPH = "mb-4 leading-relaxed"
LINK = "text-blue-600 hover:text-blue-800 underline transition-colors"
ORDERED_LIST = "list-decimal ml-6 my-4 space-y-2"
UNORDERED_LIST = "list-disc ml-6 my-4 space-y-2"
LIST_ITEM = "leading-relaxed"
QUOTE = "border-l-4 border-gray-300 pl-4 py-2 my-4 italic text-gray-700 bg-gray-50"
CODE_BLOCK = "bg-gray-900 text-gray-100 p-4 rounded-lg my-4 overflow-x-auto"
CODE_BLOCK_INNER = "text-sm font-mono"
INLINE_CODE = "bg-gray-100 px-1.5 py-0.5 rounded text-sm"
COLOR_SPAN = "inline"
HORIZONTAL_RULE = "my-8 border-t border-gray-300"
FIGURE = "my-6"
FIGURE_FRAME = "relative w-full h-auto rounded-lg overflow-hidden"
FIGURE_IMAGE = "w-full h-auto object-cover rounded-lg"
FIGURE_CAPTION = "text-sm text-gray-600 text-center mt-2 italic"
TABLE_WRAPPER = "overflow-x-auto my-6"
TABLE = "min-w-full border-collapse border border-gray-300"
TABLE_ROW = "border-b border-gray-300"
TABLE_CELL = "border border-gray-300 px-4 py-2"
CALLOUT = "my-4 border-l-4 p-4 rounded"

HEADINGS: Dict[int, str] = {
    1: "text-4xl font-bold my-6 scroll-mt-24",
    2: "text-3xl font-bold my-5 scroll-mt-24",
    3: "text-2xl font-bold my-4 scroll-mt-24",
    4: "text-xl font-bold my-3 scroll-mt-24",
    5: "text-lg font-bold my-3 scroll-mt-24",
    6: "text-base font-bold my-2 scroll-mt-24",
}

_BUTTON_BASE = "inline-flex items-center justify-center px-6 py-3 rounded-lg font-medium transition"

BUTTON_STYLES: Dict[str, str] = {
    "primary": f"{_BUTTON_BASE} bg-blue-600 text-white hover:bg-blue-700",
    "secondary": f"{_BUTTON_BASE} bg-gray-700 text-white hover:bg-gray-800",
    "outline": f"{_BUTTON_BASE} border-2 border-blue-600 text-blue-600 hover:bg-blue-50",
    "ghost": f"{_BUTTON_BASE} text-blue-600 hover:bg-blue-50",
}

BUTTON_SIZES: Dict[str, str] = {
    "small": "text-sm px-4 py-2",
    "medium": "text-base",
    "large": "text-lg px-8 py-4",
}

BUTTON_ALIGNMENTS = ("left", "center", "right")

CALLOUT_COLORS: Dict[str, str] = {
    "info": "border-blue-500 bg-blue-50 text-blue-900",
    "warning": "border-yellow-500 bg-yellow-50 text-yellow-900",
    "success": "border-green-500 bg-green-50 text-green-900",
    "error": "border-red-500 bg-red-50 text-red-900",
}
