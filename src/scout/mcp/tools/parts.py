"""Language-aware part tools: find and replace top-level constructs."""
from loguru import logger

from scout.exceptions import PartNotFoundError, ScoutError
from scout.mutation import supported_part_types as core_supported_part_types

from ..service_manager import get_service_manager
from .errors import error_response


def register(mcp):
    @mcp.tool()
    def find_file_part(
        path: str,
        language: str,
        part_type: str,
        part_name: str,
    ) -> dict:
        """
        Locate a top-level construct in a source file by kind and name.

        Part types for Go: func, type, const, var, import, package.
        Methods are addressed as `ReceiverType.Name`, e.g. `*Server.Start`
        for a pointer receiver or `Config.Validate` for a value receiver.
        A const/var/type name selects its whole declaration, group included.
        Imports match the path with or without quotes.

        Args:
            path: File to search
            language: Language identifier ("go")
            part_type: Kind of construct
            part_name: Name of construct

        Returns:
            found, part_type, part_name, start_line, end_line (1-based, inclusive),
            start_offset, end_offset (byte offsets, end exclusive), content, file_path
        """
        logger.info(f"Tool called: find_file_part path={path} part_type={part_type} part_name={part_name}")
        try:
            info = get_service_manager().mutation.find_part(path, language, part_type, part_name)
            if not info.found:
                raise PartNotFoundError(part_type, part_name)
        except ScoutError as e:
            logger.warning(f"find_file_part failed: {e}")
            return error_response(e)

        logger.info(f"Tool completed: find_file_part path={path} found=True")
        return {
            "found": True,
            "part_type": part_type,
            "part_name": part_name,
            "start_line": info.start_line,
            "end_line": info.end_line,
            "start_offset": info.start_offset,
            "end_offset": info.end_offset,
            "content": info.content,
            "file_path": path,
        }

    @mcp.tool()
    def replace_file_part(
        path: str,
        language: str,
        part_type: str,
        part_name: str,
        new_content: str,
    ) -> dict:
        """
        Replace a top-level construct with new content.

        The replacement is spliced into the construct's exact span and the
        whole file is re-parsed; the file is written only if it still parses.
        On any error the file is left unchanged.

        Args:
            path: File to modify
            language: Language identifier ("go")
            part_type: Kind of construct (func, type, const, var, import, package)
            part_name: Name of construct; methods as `ReceiverType.Name`
            new_content: Complete replacement text for the construct

        Returns:
            success, file_path, language, part_type, part_name, message
        """
        logger.info(f"Tool called: replace_file_part path={path} part_type={part_type} part_name={part_name}")
        try:
            get_service_manager().mutation.replace_part(path, language, part_type, part_name, new_content)
        except ScoutError as e:
            logger.warning(f"replace_file_part failed: {e}")
            return error_response(e)

        logger.info(f"Tool completed: replace_file_part path={path}")
        return {
            "success": True,
            "file_path": path,
            "language": language,
            "part_type": part_type,
            "part_name": part_name,
            "message": f"Successfully replaced {part_type} '{part_name}' in {path}",
        }

    @mcp.tool()
    def supported_part_types(language: str = "go") -> dict:
        """
        List the part types find_file_part and replace_file_part accept.

        Args:
            language: Language identifier

        Returns:
            language and its part_types
        """
        try:
            part_types = core_supported_part_types(language)
        except ScoutError as e:
            return error_response(e)
        return {"language": language, "part_types": part_types}
