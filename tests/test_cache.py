"""Tests for annotation settings and the driver evaluation cache."""

import pytest
from pydantic import ValidationError

from oncomerge.cache import DriverInfoCache
from oncomerge.config import AnnotationSettings
from oncomerge.models.annotations import PutativeDriverInfo


class TestAnnotationSettings:
    """Tests for AnnotationSettings."""

    def test_defaults(self):
        """Test that every evidence source beyond OncoKB is off by default."""
        settings = AnnotationSettings()
        assert settings.custom_driver_annotations_active is False
        assert settings.hotspot_annotations_active is False
        assert settings.custom_driver_tier_selection == {}
        assert settings.driver_cache_size == 10_000

    def test_tiers_from_list(self):
        """Test that a plain list of tiers is accepted."""
        settings = AnnotationSettings(custom_driver_tier_selection=["Class 2", "Class 1"])
        assert settings.custom_driver_tier_selection == {"Class 2": True, "Class 1": True}
        assert settings.selected_tiers == ("Class 1", "Class 2")

    def test_flags_ignore_unselected_tiers(self):
        """Test that unselected tiers do not change the flags."""
        a = AnnotationSettings(custom_driver_tier_selection={"T1": True, "T2": False})
        b = AnnotationSettings(custom_driver_tier_selection={"T1": True})
        assert a.flags() == b.flags()
        hash(a.flags())

    def test_invalid_cache_size(self):
        """Test that a non-positive cache size is rejected."""
        with pytest.raises(ValidationError):
            AnnotationSettings(driver_cache_size=0)

    def test_from_env(self):
        """Test reading settings from environment variables."""
        settings = AnnotationSettings.from_env({
            "ONCOMERGE_CUSTOM_DRIVERS": "true",
            "ONCOMERGE_HOTSPOTS": "0",
            "ONCOMERGE_DRIVER_TIERS": "Class 1, Class 2,",
            "ONCOMERGE_CACHE_SIZE": "50",
        })
        assert settings.custom_driver_annotations_active is True
        assert settings.hotspot_annotations_active is False
        assert settings.selected_tiers == ("Class 1", "Class 2")
        assert settings.driver_cache_size == 50

    def test_from_env_invalid_cache_size(self):
        """Test that a non-numeric cache size is a validation error."""
        with pytest.raises(ValidationError):
            AnnotationSettings.from_env({"ONCOMERGE_CACHE_SIZE": "lots"})

    def test_from_empty_env(self):
        """Test that an empty environment gives the defaults."""
        assert AnnotationSettings.from_env({}) == AnnotationSettings()


class TestDriverInfoCache:
    """Tests for DriverInfoCache."""

    def test_hit_after_miss(self, sample_mutation):
        """Test that the second evaluation of a record is served from cache."""
        cache = DriverInfoCache()
        calls = []

        def compute():
            calls.append(1)
            return PutativeDriverInfo(oncokb="Oncogenic")

        first = cache.get_or_compute(sample_mutation, ("mutation",), compute)
        second = cache.get_or_compute(sample_mutation, ("mutation",), compute)

        assert first is second
        assert len(calls) == 1
        assert (cache.hits, cache.misses) == (1, 1)

    def test_equal_records_share_entry(self, make_mutation):
        """Test that equal records built separately hit the same entry."""
        cache = DriverInfoCache()
        cache.get_or_compute(make_mutation(), "f", PutativeDriverInfo)
        cache.get_or_compute(make_mutation(), "f", PutativeDriverInfo)
        assert len(cache) == 1
        assert cache.hits == 1

    def test_flags_are_part_of_key(self, sample_mutation):
        """Test that different settings are cached separately."""
        cache = DriverInfoCache()
        cache.get_or_compute(sample_mutation, (False,), PutativeDriverInfo)
        cache.get_or_compute(sample_mutation, (True,), PutativeDriverInfo)
        assert len(cache) == 2
        assert DriverInfoCache.make_key(sample_mutation, (True,)) in cache

    def test_lru_eviction(self, make_mutation):
        """Test that the least recently used entry is evicted."""
        cache = DriverInfoCache(maxsize=2)
        a, b, c = (make_mutation(protein_change=p) for p in ("A1B", "C2D", "E3F"))

        cache.get_or_compute(a, "f", PutativeDriverInfo)
        cache.get_or_compute(b, "f", PutativeDriverInfo)
        cache.get_or_compute(a, "f", PutativeDriverInfo)
        cache.get_or_compute(c, "f", PutativeDriverInfo)

        assert len(cache) == 2
        assert DriverInfoCache.make_key(a, "f") in cache
        assert DriverInfoCache.make_key(b, "f") not in cache
        assert DriverInfoCache.make_key(c, "f") in cache

    def test_clear(self, sample_mutation):
        """Test that clearing drops entries and counters."""
        cache = DriverInfoCache()
        cache.get_or_compute(sample_mutation, "f", PutativeDriverInfo)
        cache.clear()
        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)

    def test_invalid_size(self):
        """Test that a non-positive size is rejected."""
        with pytest.raises(ValueError):
            DriverInfoCache(maxsize=0)
