"""
SCORECARD App - Performance merge and remarks services

PerformanceService joins every weekly collection into one row per driver
and computes the DSP-level metrics shown on the scorecard dashboard.
RemarksService upserts driver/manager remarks with an audit trail.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.utils import timezone

from hr.models import Employee
from .models import (
    AvailableWeek, DeliveryExcellence, PhotoOnDelivery, CustomerDeliveryFeedback,
    DVICInspection, SafetyEvent, CDFNegative, QualityDSBDNR, DeliveryCompletion,
    ReturnToStation, ScoreCardRemarks, ScoreCardRemarksHistory,
)
from .tiers import (
    NOT_AVAILABLE, classify_overall, classify_rate, classify_percent, classify_fico,
    classify_dsb, classify_ced, safe_avg, parse_pct, is_rushed, round2,
)
from .weeks import week_range

logger = logging.getLogger(__name__)


POD_REJECT_LABELS = (
    ('blurry_photo', 'Blurry Photo'),
    ('human_in_the_picture', 'Human in Picture'),
    ('no_package_detected', 'No Package Detected'),
    ('package_in_car', 'Package in Car'),
    ('package_in_hand', 'Package in Hand'),
    ('package_not_clearly_visible', 'Package Not Clearly Visible'),
    ('package_too_close', 'Package Too Close'),
    ('photo_too_dark', 'Photo Too Dark'),
    ('other', 'Other'),
)

SAFETY_RATES = (
    'speeding_event_rate', 'seatbelt_off_rate', 'distractions_rate',
    'sign_signal_violations_rate', 'following_distance_rate',
)

POD_COUNT_FIELDS = (
    'opportunities', 'success', 'bypass', 'rejects',
) + tuple(field for field, _ in POD_REJECT_LABELS)

DVIC_FIELDS = (
    'vin', 'fleet_type', 'inspection_type', 'inspection_status',
    'start_time', 'end_time', 'duration', 'start_date',
)

SAFETY_FIELDS = (
    'date', 'delivery_associate', 'event_id', 'date_time', 'vin', 'program_impact',
    'metric_type', 'metric_subtype', 'source', 'video_link', 'review_details',
)

CDF_NEGATIVE_FIELDS = (
    'delivery_group_id', 'delivery_associate_name',
) + CDFNegative.FLAG_FIELDS + ('feedback_details', 'tracking_id', 'delivery_date')

DSB_COUNT_FIELDS = (
    'dsb_count', 'dsb_dpmo', 'attended_delivery_count', 'unattended_delivery_count',
    'simultaneous_deliveries', 'delivered_over_50m', 'incorrect_scan_usage_attended',
    'incorrect_scan_usage_unattended', 'no_pod_on_delivery', 'scanned_not_delivered_not_returned',
)

RTS_FIELDS = (
    'delivery_associate', 'tracking_id', 'impact_dcr', 'rts_code', 'customer_contact_details',
    'planned_delivery_date', 'exemption_reason', 'service_area',
)

DCR_COUNT_FIELDS = (
    'packages_delivered', 'packages_dispatched', 'packages_returned_to_station',
    'packages_returned_da_controllable', 'rts_business_closed', 'rts_customer_unavailable',
    'rts_no_secure_location', 'rts_other', 'rts_unable_to_access', 'rts_unable_to_locate',
)


def _strings(obj, fields: Iterable[str]) -> Dict[str, str]:
    return {field: getattr(obj, field) or '' for field in fields}


def _counts(obj, fields: Iterable[str]) -> Dict[str, Any]:
    return {field: getattr(obj, field) or 0 for field in fields}


def _flag_set(value: Optional[str]) -> bool:
    return bool(value) and value != '0'


class PerformanceService:
    """
    Weekly performance dashboard.

    Usage:
        PerformanceService.available_weeks()
        PerformanceService.build('2026-W07')
    """

    @staticmethod
    def available_weeks() -> List[str]:
        """Registered weeks, newest first; seeded from the data on first use."""
        weeks = list(AvailableWeek.objects.values_list('week', flat=True))

        if not weeks:
            seen = set()
            for model in (DeliveryExcellence, PhotoOnDelivery, DVICInspection, SafetyEvent):
                seen.update(model.objects.values_list('week', flat=True).distinct())
            seen.discard('')
            for week in seen:
                AvailableWeek.objects.get_or_create(week=week)
            if seen:
                logger.info(f"[SCORECARD] Backfilled {len(seen)} available weeks")
            weeks = list(seen)

        return sorted(weeks, reverse=True)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def load(week: str) -> Dict[str, list]:
        start, end = week_range(week)
        return {
            'excellence': list(DeliveryExcellence.objects.filter(week=week)),
            'pod': list(PhotoOnDelivery.objects.filter(week=week)),
            'feedback': list(CustomerDeliveryFeedback.objects.filter(week=week)),
            'dvic': list(DVICInspection.objects.filter(
                start_date__gte=start.isoformat(), start_date__lte=end.isoformat()
            )),
            'safety': list(SafetyEvent.objects.filter(week=week)),
            'cdf_negative': list(CDFNegative.objects.filter(week=week)),
            'quality': list(QualityDSBDNR.objects.filter(week=week)),
            'dcr': list(DeliveryCompletion.objects.filter(week=week)),
            'rts': list(ReturnToStation.objects.filter(week=week)),
        }

    # ------------------------------------------------------------------
    # Per-driver merge
    # ------------------------------------------------------------------

    @classmethod
    def merge_drivers(cls, data: Dict[str, list]) -> List[Dict[str, Any]]:
        excellence = {r.transporter_id: r for r in data['excellence'] if r.transporter_id}
        pod = {r.transporter_id: r for r in data['pod'] if r.transporter_id}
        quality = {r.transporter_id: r for r in data['quality'] if r.transporter_id}
        dcr = {r.transporter_id: r for r in data['dcr'] if r.transporter_id}

        dvic, safety, cdf_negative, rts = (defaultdict(list) for _ in range(4))
        for r in data['dvic']:
            dvic[r.transporter_id].append(r)
        for r in data['safety']:
            safety[r.transporter_id].append(r)
        for r in data['cdf_negative']:
            key = r.transporter_id or r.delivery_associate
            if key:
                cdf_negative[key].append(r)
        for r in data['rts']:
            if r.transporter_id:
                rts[r.transporter_id].append(r)

        transporter_ids = set()
        for name in ('excellence', 'pod', 'dvic', 'safety', 'cdf_negative', 'quality', 'dcr', 'rts'):
            transporter_ids.update(r.transporter_id for r in data[name] if r.transporter_id)

        images = dict(
            Employee.objects.filter(transporter_id__in=transporter_ids)
            .exclude(profile_image='')
            .values_list('transporter_id', 'profile_image')
        )

        drivers = [
            cls._driver_row(
                tid,
                excellence.get(tid), pod.get(tid), quality.get(tid), dcr.get(tid),
                dvic.get(tid, []), safety.get(tid, []), cdf_negative.get(tid, []), rts.get(tid, []),
                images.get(tid),
            )
            for tid in transporter_ids
        ]

        drivers.sort(key=lambda d: (
            -d['dsb_count'],
            -d['pod_rejects'],
            -d['issue_count'],
            d['overall_score'] if d['overall_score'] is not None else 999,
            d['name'],
        ))
        return drivers

    @staticmethod
    def _driver_row(transporter_id, excellence, pod, quality, dcr, dvic, safety, cdf_negative, rts, image):
        name = (
            (excellence and excellence.delivery_associate)
            or (dcr and dcr.delivery_associate)
            or (quality and quality.delivery_associate)
            or (safety and safety[0].delivery_associate)
            or (dvic and dvic[0].transporter_name)
            or 'Unknown'
        )

        row = {
            'name': name,
            'transporter_id': transporter_id,
            'profile_image': image,
            'overall_standing': NOT_AVAILABLE,
            'overall_score': None,
            'fico_metric': None,
            'fico_tier': NOT_AVAILABLE,
            'dcr': NOT_AVAILABLE,
            'dcr_tier': NOT_AVAILABLE,
            'dsb': 0,
            'dsb_tier': NOT_AVAILABLE,
            'pod': NOT_AVAILABLE,
            'pod_tier': NOT_AVAILABLE,
            'psb': 0,
            'psb_tier': NOT_AVAILABLE,
            'ced': 0,
            'ced_tier': NOT_AVAILABLE,
            'packages_delivered': 0,
        }
        for rate in SAFETY_RATES:
            row[rate] = 0
            row[f'{rate}_tier'] = NOT_AVAILABLE
        for score in ('fico_score', 'dcr_score', 'dsb_dpmo_score', 'pod_score', 'psb_score', 'ced_score'):
            row[score] = None

        if excellence:
            row.update({
                'overall_standing': excellence.overall_standing or NOT_AVAILABLE,
                'overall_score': excellence.overall_score,
                'fico_metric': excellence.fico_metric,
                'fico_tier': excellence.fico_tier or NOT_AVAILABLE,
                'dcr': excellence.dcr or NOT_AVAILABLE,
                'dcr_tier': excellence.dcr_tier or NOT_AVAILABLE,
                'dsb': excellence.dsb or 0,
                'dsb_tier': excellence.dsb_dpmo_tier or NOT_AVAILABLE,
                'pod': excellence.pod or NOT_AVAILABLE,
                'pod_tier': excellence.pod_tier or NOT_AVAILABLE,
                'psb': excellence.psb or 0,
                'psb_tier': excellence.psb_tier or NOT_AVAILABLE,
                'ced': excellence.ced or 0,
                'ced_tier': excellence.ced_tier or NOT_AVAILABLE,
                'packages_delivered': excellence.packages_delivered or 0,
                'fico_score': excellence.fico_score,
                'dcr_score': excellence.dcr_score,
                'dsb_dpmo_score': excellence.dsb_dpmo_score,
                'pod_score': excellence.pod_score,
                'psb_score': excellence.psb_score,
                'ced_score': excellence.ced_score,
            })
            for rate in SAFETY_RATES:
                row[rate] = getattr(excellence, rate) or 0
                row[f'{rate}_tier'] = getattr(excellence, f'{rate}_tier') or NOT_AVAILABLE

        pod_counts = _counts(pod, POD_COUNT_FIELDS) if pod else dict.fromkeys(POD_COUNT_FIELDS, 0)
        row.update({
            'pod_opportunities': pod_counts['opportunities'],
            'pod_success': pod_counts['success'],
            'pod_bypass': pod_counts['bypass'],
            'pod_rejects': pod_counts['rejects'],
            'pod_reject_breakdown': {
                label: pod_counts[field] for field, label in POD_REJECT_LABELS if pod_counts[field]
            },
            'dsb_count': row['dsb'],
            'issue_count': pod_counts['rejects'] + len(cdf_negative),
            'dcr_from_collection': dcr.dcr if dcr else None,
            'dvic_inspections': [_strings(r, DVIC_FIELDS) for r in dvic],
            'dvic_total_inspections': len(dvic),
            'dvic_rushed_count': sum(1 for r in dvic if is_rushed(r.duration)),
            'safety_events': [_strings(r, SAFETY_FIELDS) for r in safety],
            'safety_event_count': len(safety),
            'cdf_negative_records': [_strings(r, CDF_NEGATIVE_FIELDS) for r in cdf_negative],
            'cdf_negative_count': len(cdf_negative),
            'quality_dsb_dnr': _counts(quality, DSB_COUNT_FIELDS) if quality else None,
            'rts_records': [_strings(r, RTS_FIELDS) for r in rts],
            'rts_count': len(rts),
        })
        return row

    # ------------------------------------------------------------------
    # DSP-level metrics
    # ------------------------------------------------------------------

    @staticmethod
    def focus_areas(total_ced, total_dsb, total_pod_rejects, worst_safety_rate, avg_dcr) -> List[Dict[str, Any]]:
        areas = []
        if total_ced > 10:
            areas.append({
                'area': 'Customer Escalation Defect DPMO',
                'reason': f"{total_ced:g} escalation incidents",
                'score': total_ced,
            })
        if total_dsb > 5:
            areas.append({
                'area': 'Delivery Success Behaviors',
                'reason': f"{total_dsb:g} total DSB events",
                'score': total_dsb,
            })
        if total_pod_rejects > 5:
            areas.append({
                'area': 'Photo-On-Delivery Compliance',
                'reason': f"{total_pod_rejects} POD rejects",
                'score': total_pod_rejects,
            })
        if worst_safety_rate > 1.5:
            areas.append({
                'area': 'On-Road Safety',
                'reason': f"Worst rate: {worst_safety_rate:.2f} events/100 trips",
                'score': worst_safety_rate,
            })
        if avg_dcr < 99:
            areas.append({
                'area': 'Delivery Completion Rate',
                'reason': f"Average DCR: {avg_dcr:.2f}%",
                'score': 100 - avg_dcr,
            })
        areas.sort(key=lambda a: a['score'], reverse=True)
        return areas[:3]

    @classmethod
    def dsp_metrics(cls, drivers: List[Dict[str, Any]], data: Dict[str, list]) -> Dict[str, Any]:
        scores = [d['overall_score'] for d in drivers if d['overall_score'] is not None]
        avg_overall = sum(scores) / len(scores) if scores else 0

        rate_avgs = {rate: safe_avg(d[rate] for d in drivers) for rate in SAFETY_RATES}
        worst_safety_rate = max(rate_avgs.values()) if drivers else 0

        fico_values = [d['fico_metric'] for d in drivers if d['fico_metric'] is not None]
        avg_fico = sum(fico_values) / len(fico_values) if fico_values else 0

        dcr_values = [v for v in (parse_pct(d['dcr']) for d in drivers) if v is not None]
        avg_dcr = sum(dcr_values) / len(dcr_values) if dcr_values else 0

        pod_values = [v for v in (parse_pct(d['pod']) for d in drivers) if v is not None]
        avg_pod = sum(pod_values) / len(pod_values) if pod_values else 0

        total_dsb = sum(d['dsb'] or 0 for d in drivers)
        total_pod_opps = sum(d['pod_opportunities'] for d in drivers)
        total_pod_success = sum(d['pod_success'] for d in drivers)
        total_pod_rejects = sum(d['pod_rejects'] for d in drivers)
        total_pod_bypass = sum(d['pod_bypass'] for d in drivers)
        pod_acceptance_rate = total_pod_success / total_pod_opps * 100 if total_pod_opps else 0

        ced_values = [d['ced'] for d in drivers if d['ced']]
        avg_ced = sum(ced_values) / len(ced_values) if ced_values else 0
        total_ced = sum(d['ced'] or 0 for d in drivers)

        safety = {
            'tier': classify_rate(worst_safety_rate),
            'avg_fico': round(avg_fico),
            'fico_tier': classify_fico(avg_fico) if avg_fico > 0 else NOT_AVAILABLE,
        }
        for rate, value in rate_avgs.items():
            safety[rate] = round2(value)
            safety[f'{rate}_tier'] = classify_rate(value)

        return {
            'overall_score': round2(avg_overall),
            'overall_tier': classify_overall(avg_overall * 10) if avg_overall > 0 else NOT_AVAILABLE,
            'tier_distribution': dict(Counter(d['overall_standing'] or NOT_AVAILABLE for d in drivers)),
            'safety': safety,
            'delivery_quality': {
                'tier': classify_percent(avg_dcr),
                'dcr': round2(avg_dcr),
                'dcr_tier': classify_percent(avg_dcr),
                'total_dsb': round2(total_dsb),
                'dsb_tier': classify_dsb(total_dsb),
                'pod': round2(avg_pod),
                'pod_tier': classify_percent(avg_pod),
                'pod_acceptance_rate': round2(pod_acceptance_rate),
                'total_pod_opps': total_pod_opps,
                'total_pod_success': total_pod_success,
                'total_pod_rejects': total_pod_rejects,
                'total_pod_bypass': total_pod_bypass,
                'total_ced': round2(total_ced),
                'avg_ced': round2(avg_ced),
                'ced_tier': classify_ced(total_ced),
            },
            'focus_areas': cls.focus_areas(total_ced, total_dsb, total_pod_rejects, worst_safety_rate, avg_dcr),
            'dvic_summary': cls.dvic_summary(data['dvic']),
            'safety_aggregate': cls.safety_aggregate(data['safety']),
            'cdf_negative_aggregate': cls.cdf_negative_aggregate(data['cdf_negative']),
            'dcr_aggregate': cls.dcr_aggregate(data['dcr']),
            'dsb_aggregate': cls.dsb_aggregate(data['quality']),
            'collection_counts': {name: len(rows) for name, rows in data.items()},
        }

    @staticmethod
    def dvic_summary(rows) -> Dict[str, int]:
        return {
            'total_inspections': len(rows),
            'rushed_count': sum(1 for r in rows if is_rushed(r.duration)),
            'drivers_with_inspections': len({r.transporter_id for r in rows}),
        }

    @staticmethod
    def safety_aggregate(rows) -> Dict[str, Any]:
        return {
            'total_events': len(rows),
            'drivers_with_events': len({r.transporter_id for r in rows}),
            'by_metric_type': dict(Counter(r.metric_type or 'Unknown' for r in rows)),
            'by_metric_subtype': dict(Counter(r.metric_subtype or 'Unknown' for r in rows)),
            'by_program_impact': dict(Counter(r.program_impact or 'Unknown' for r in rows)),
        }

    @staticmethod
    def cdf_negative_aggregate(rows) -> Dict[str, int]:
        aggregate = {
            'total': len(rows),
            'drivers_affected': len({r.transporter_id or r.delivery_associate for r in rows}),
        }
        for field in CDFNegative.FLAG_FIELDS:
            aggregate[field] = sum(1 for r in rows if _flag_set(getattr(r, field)))
        return aggregate

    @staticmethod
    def dcr_aggregate(rows) -> Dict[str, Any]:
        aggregate = {field: sum(getattr(r, field) or 0 for r in rows) for field in DCR_COUNT_FIELDS}
        aggregate['avg_dcr'] = round2(safe_avg(r.dcr for r in rows))
        aggregate['drivers_count'] = len(rows)
        return aggregate

    @staticmethod
    def dsb_aggregate(rows) -> Dict[str, Any]:
        aggregate = {
            field: sum(getattr(r, field) or 0 for r in rows)
            for field in DSB_COUNT_FIELDS if field != 'dsb_dpmo'
        }
        aggregate['avg_dsb_dpmo'] = round(safe_avg(r.dsb_dpmo for r in rows))
        aggregate['drivers_count'] = len(rows)
        return aggregate

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, week: str) -> Dict[str, Any]:
        data = cls.load(week)
        drivers = cls.merge_drivers(data)
        metrics = cls.dsp_metrics(drivers, data)

        pod_rows = [
            dict(transporter_id=r.transporter_id, **_counts(r, POD_COUNT_FIELDS))
            for r in data['pod']
        ]
        pod_rows.sort(key=lambda r: (-r['rejects'], r['transporter_id'] or ''))

        return {
            'week': week,
            'total_drivers': len(drivers),
            'total_delivered': sum(d['packages_delivered'] for d in drivers),
            'avg_overall_score': metrics['overall_score'],
            'dsp_metrics': metrics,
            'drivers': drivers,
            'pod_rows': pod_rows,
            'dvic_rows': [
                dict(
                    transporter_id=r.transporter_id,
                    transporter_name=r.transporter_name or 'Unknown',
                    **_strings(r, DVIC_FIELDS),
                )
                for r in data['dvic']
            ],
            'cdf_negative_rows': [
                dict(
                    _strings(r, CDF_NEGATIVE_FIELDS),
                    delivery_associate_name=r.delivery_associate_name or r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id or r.delivery_associate or '',
                )
                for r in data['cdf_negative']
            ],
            'rts_rows': [
                dict(
                    _strings(r, RTS_FIELDS),
                    delivery_associate=r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id,
                )
                for r in data['rts']
            ],
            'delivery_excellence_rows': [
                dict(
                    delivery_associate=r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id,
                    overall_standing=r.overall_standing or NOT_AVAILABLE,
                    overall_score=r.overall_score or 0,
                    fico_metric=r.fico_metric,
                    fico_tier=r.fico_tier or NOT_AVAILABLE,
                    ced=r.ced or 0,
                    dcr=r.dcr or NOT_AVAILABLE,
                    dsb=r.dsb or 0,
                    pod=r.pod or NOT_AVAILABLE,
                    packages_delivered=r.packages_delivered or 0,
                    **{rate: getattr(r, rate) or 0 for rate in SAFETY_RATES},
                )
                for r in data['excellence']
            ],
            'dcr_rows': [
                dict(
                    delivery_associate=r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id,
                    dcr=r.dcr or 0,
                    **_counts(r, DCR_COUNT_FIELDS),
                )
                for r in data['dcr']
            ],
            'dsb_rows': [
                dict(
                    delivery_associate=r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id,
                    **_counts(r, DSB_COUNT_FIELDS),
                )
                for r in data['quality']
            ],
            'safety_rows': [
                dict(
                    _strings(r, SAFETY_FIELDS),
                    delivery_associate=r.delivery_associate or 'Unknown',
                    transporter_id=r.transporter_id,
                )
                for r in data['safety']
            ],
        }

    @classmethod
    def driver_scorecard(cls, week: str, transporter_id: str) -> Optional[Dict[str, Any]]:
        """One driver's merged row plus the DSP context, or None if absent that week."""
        report = cls.build(week)
        for driver in report['drivers']:
            if driver['transporter_id'] == transporter_id:
                return {
                    'week': week,
                    'driver': driver,
                    'dsp_metrics': report['dsp_metrics'],
                    'total_drivers': report['total_drivers'],
                }
        return None


class RemarksService:
    """Upsert scorecard remarks and record who changed what."""

    TEXT_FIELDS = ('driver_remarks', 'manager_remarks', 'manager_name')
    SIGNATURE_FIELDS = ('driver_signature', 'manager_signature')

    @classmethod
    @transaction.atomic
    def upsert(cls, transporter_id: str, week: str, data: Dict[str, Any], user=None) -> ScoreCardRemarks:
        remarks, created = ScoreCardRemarks.objects.select_for_update().get_or_create(
            transporter_id=transporter_id, week=week
        )

        changed = []
        for field in cls.TEXT_FIELDS:
            if field in data and data[field] is not None and getattr(remarks, field) != data[field]:
                setattr(remarks, field, data[field])
                changed.append(field)

        now = timezone.now()
        for field in cls.SIGNATURE_FIELDS:
            if field not in data or data[field] is None:
                continue
            signature = data[field]
            if signature == getattr(remarks, field):
                continue
            setattr(remarks, field, signature)
            setattr(remarks, f'{field}_at', now if signature else None)
            changed.append(field)

        if user is not None and user.is_authenticated and 'manager_signature' in changed:
            remarks.manager = user
            if not remarks.manager_name:
                remarks.manager_name = user.name or user.email

        remarks.save()

        if created or changed:
            ScoreCardRemarksHistory.objects.create(
                remarks=remarks,
                action=ScoreCardRemarksHistory.Action.CREATED if created else ScoreCardRemarksHistory.Action.UPDATED,
                changed_fields=changed,
                changed_by=getattr(user, 'email', '') or '',
            )
            logger.info(
                f"[SCORECARD] Remarks {'created' if created else 'updated'} for "
                f"{transporter_id} {week}: {', '.join(changed) or 'no fields'}"
            )
        return remarks
