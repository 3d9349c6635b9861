from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..common.decorators import login_required
from ..common.responses import domain_error, server_error
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    @app.route("/api/horas/<int:mes>", methods=["GET"], endpoint="monthly_hours")
    @login_required
    def monthly_hours(mes: int):
        secoes = request.args.getlist("secao") or None
        search = request.args.get("q") or None
        try:
            report = container.hours_service.build_month(mes, secoes=secoes, search=search)
            return jsonify({"success": True, **report.to_dict()})
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Error computing hours of month %s", mes)
            return server_error("Erro ao calcular horas", e)

    @app.route("/api/horas/<int:mes>/export", methods=["GET"], endpoint="export_monthly_hours")
    @login_required
    def export_monthly_hours(mes: int):
        try:
            content = container.hours_service.export_month(
                mes,
                secoes=request.args.getlist("secao") or None,
                search=request.args.get("q") or None,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Error exporting hours of month %s", mes)
            return server_error("Erro ao exportar", e)

        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"horas_{mes + 1:02d}_{container.hours_service.year}.xlsx",
        )
